from zeusgen.cli.cli import main

main()
