"""Useful tasks for use when developing modelwidgets.

This uses the `Invoke` library."""
from pathlib import Path

from invoke import Context, Exit, task

PROJECT_DIR = Path(__file__).parent


@task
def test(c: Context, path="modelwidgets", create_db=False, verbose=False):
    """Run the test suite"""
    args = " --create-db" if create_db else ""
    if verbose:
        args += " -v"
    with c.cd(PROJECT_DIR):
        c.run(f"pytest {path}{args}", pty=True)


@task
def requirements(c: Context, upgrade=False, upgrade_package=None):
    if upgrade and upgrade_package:
        raise Exit("Cannot specify both upgrade and upgrade-package", -1)
    args = " -U" if upgrade else ""
    cmd_base = "pip-compile -q --resolver=backtracking"
    env = {"CUSTOM_COMPILE_COMMAND": "inv requirements"}
    if upgrade_package:
        cmd_base += f" --upgrade-package {upgrade_package}"
    with c.cd(PROJECT_DIR):
        c.run(f"{cmd_base} pyproject.toml -o requirements.txt{args}", env=env)
        c.run(f"{cmd_base} pyproject.toml --extra test --extra dev -o requirements-dev.txt{args}", env=env)
