from diff_processor.cli import main

main()
