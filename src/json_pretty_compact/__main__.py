from json_pretty_compact._json_pretty_compact import main

if __name__ == "__main__":  # pragma: no cover
    main()
