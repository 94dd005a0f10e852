"""``python -m numberlink`` で実行されたときの入口"""

from .solve_cli import cli

cli()
