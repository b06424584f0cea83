from scalargraph.example import main

main()
