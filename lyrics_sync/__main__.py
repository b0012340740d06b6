from lyrics_sync.cli import main

main()
