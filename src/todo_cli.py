"""Command-line interface for the todo list.

One invocation runs at most one action, add taking priority over complete,
then prints the table. Bad filter or sort arguments are reported on stderr
and skipped; only a store that cannot be opened or written ends the run
with a non-zero status.
"""
from pathlib import Path
from typing import Optional

import click

from todo_config import Settings
from todo_logging import configure_logging
from todo_query import filter_records, sort_records
from todo_storage import Storage
from todo_table import render_lines
from todo_theme import DONE_COLOR, HEADER_COLOR, PENDING_COLOR, RULE_COLOR, color
from todo_list import TodoList

__version__ = "0.1.0"

LINE_STYLES = {
    'rule': RULE_COLOR,
    'header': HEADER_COLOR,
    'done': DONE_COLOR,
    'pending': PENDING_COLOR,
}


def _paint(kind: str, line: str) -> str:
    return color(line, LINE_STYLES.get(kind, ''))


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option('-a', '--add', default='', help='Description of a task to add.')
@click.option('-p', '--project', default=None,
              help='Project label for --add (default: TODO_DEFAULT_PROJECT or "General").')
@click.option('-c', '--complete', type=click.IntRange(min=0), default=0, show_default=True,
              help='Toggle completion of the task with this id (0 = none).')
@click.option('-s', '--sort', 'sort_field', default='',
              help='Sort by id, project, description, completed, date_added or date_completed.')
@click.option('-f', '--filter', 'filter_expr', default='',
              help='Filter expression, e.g. "project ~*= home". Operators: == != ~= ~*=')
@click.option('-v', '--verbose', is_flag=True, default=False, help='Also show completed tasks.')
@click.option('--file', 'todo_file', type=click.Path(dir_okay=False, path_type=Path), default=None,
              help='CSV store to use (default: TODO_FILE or data/list.csv).')
@click.version_option(__version__, prog_name='todo')
def cli(add: str, project: Optional[str], complete: int, sort_field: str,
        filter_expr: str, verbose: bool, todo_file: Optional[Path]) -> None:
    """Keep a todo list in a CSV file and print it as a table."""
    settings = Settings.load()
    configure_logging(settings.log_level)
    storage = Storage(todo_file or settings.todo_file)
    todo = TodoList(storage, settings.default_project)
    try:
        storage.touch()
        if add:
            todo.add(add, project)
        elif complete > 0:
            todo.toggle(complete)
        records = todo.load()
    except OSError as exc:
        raise click.ClickException(f"cannot use todo store {storage.path}: {exc}") from exc

    records = filter_records(records, filter_expr)
    records = sort_records(records, sort_field)
    for line in render_lines(records, verbose, paint=_paint):
        click.echo(line)


if __name__ == '__main__':  # pragma: no cover
    cli(prog_name='todo')
