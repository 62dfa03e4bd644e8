"""Entry point for `python -m git_ls`."""

from .cli import app

app(prog_name="git-ls")
