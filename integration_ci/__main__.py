from integration_ci.cli import main

main()
