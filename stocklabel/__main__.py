from stocklabel.cli import main

main()
