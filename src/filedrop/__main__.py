from filedrop.server import main

main()
