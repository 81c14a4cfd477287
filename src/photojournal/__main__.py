from photojournal.core.cli import main

main()
