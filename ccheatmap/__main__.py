from ccheatmap.ccheatmap import main

main()
