from chirpy.app import main

main()
