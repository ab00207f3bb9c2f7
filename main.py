from guitar_store.server import main

if __name__ == "__main__":
    main()
