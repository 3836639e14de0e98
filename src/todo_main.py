"""Main entry point for the terminal todo list (`todo` console script)."""
from todo_cli import cli


def main():
    cli(prog_name='todo')

if __name__ == "__main__":
    main()
