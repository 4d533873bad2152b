from turnkeep.main import main

main()
