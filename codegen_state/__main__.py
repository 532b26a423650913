from codegen_state.cli import main

if __name__ == "__main__":
    main()
