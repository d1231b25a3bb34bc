from .detector import main

main()
