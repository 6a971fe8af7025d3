from todokeeper.cli.main import main

main()
