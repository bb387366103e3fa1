from cargo_profclean.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
