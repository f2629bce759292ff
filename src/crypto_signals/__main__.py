from crypto_signals.app import main

main()
