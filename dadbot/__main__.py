from dadbot.launcher import main

main()
