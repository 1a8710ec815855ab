from pagegen.pipeline import main

main()
