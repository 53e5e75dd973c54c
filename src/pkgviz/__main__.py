from pkgviz.cli import main

main()
