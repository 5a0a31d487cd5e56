import logging
from dataclasses import dataclass, field
from functools import update_wrapper
from pathlib import Path
from typing import Callable, Optional

import click
from click.shell_completion import get_completion_class

from kubex import __version__
from kubex.exceptions import (AliasNotFound, ConfigLoadError, ContextNotFound,
                              KubexError, ParseError, PersistError)
from kubex.models import KubeConfig
from kubex.storage.alias_storage import AliasStorage
from kubex.storage.kubeconfig_storage import KubeconfigStorage
from kubex.switcher import ContextSwitcher, add_alias
from kubex.utils.utils import resolve_kubeconfig_path

logger = logging.getLogger(__name__)

SUPPORTED_SHELLS = ("bash", "zsh", "fish")
COMPLETE_VAR = "_KUBEX_COMPLETE"


def confirm_overwrite(message: str) -> bool:
    """Ask a y/N question on the terminal; anything but yes declines, end of input included"""
    try:
        answer = click.prompt(f"{message} [y/N]", default="", show_default=False)
    except click.Abort:
        click.echo()
        return False
    return answer.strip().lower() in ("y", "yes")


@dataclass
class State:
    """Everything one invocation works on, attached to the click context"""
    kubeconfig_path: Path
    config: KubeConfig
    kubeconfig_storage: KubeconfigStorage
    alias_storage: AliasStorage
    confirm: Callable[[str], bool] = field(default=confirm_overwrite)

    @classmethod
    def load(cls, kubeconfig: Optional[str], alias_storage: AliasStorage = None):
        path = resolve_kubeconfig_path(kubeconfig)
        storage = KubeconfigStorage(path)
        return cls(
            kubeconfig_path=path,
            config=storage.load(),
            kubeconfig_storage=storage,
            alias_storage=alias_storage or AliasStorage(),
        )

    @property
    def switcher(self) -> ContextSwitcher:
        return ContextSwitcher(self.config, self.kubeconfig_storage, self.alias_storage)


def ensure_state(ctx) -> State:
    """Load the kubeconfig the first time a command needs it"""
    root = ctx.find_root()
    if not isinstance(root.obj, State):
        try:
            root.obj = State.load(root.params.get("kubeconfig"))
        except ConfigLoadError as e:
            raise click.ClickException(f"error loading kubeconfig: {e}")
        logger.debug("Using kubeconfig %s", root.obj.kubeconfig_path)
    return root.obj


def pass_state(f):
    """Like click.make_pass_decorator(State), loading the state on demand"""
    def new_func(*args, **kwargs):
        ctx = click.get_current_context()
        return ctx.invoke(f, ensure_state(ctx), *args, **kwargs)
    return update_wrapper(new_func, f)


def complete_context_names(ctx, param, incomplete):
    """Offer context names and aliases for `kubex use <TAB>`"""
    kubeconfig = ctx.find_root().params.get("kubeconfig")
    try:
        state = State.load(kubeconfig)
    except KubexError:
        return []
    return state.switcher.completion_candidates(incomplete)


@click.group(name="kubex")
@click.version_option(version=__version__)
@click.option("--kubeconfig", envvar="KUBECONFIG", type=click.Path(dir_okay=False),
              help="Path to kubeconfig file")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
def cli(kubeconfig, verbose):
    """kubex is a stripped-down version of kubectx for managing Kubernetes contexts."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")


@cli.command("list")
@pass_state
def list_contexts(state: State):
    """List all contexts"""
    click.echo("Available contexts:")
    for entry in state.switcher.list_contexts():
        if entry.active:
            click.echo(f"- {entry.name} (active)")
        else:
            click.echo(f"- {entry.name}")


@cli.command()
@click.argument("context", shell_complete=complete_context_names)
@pass_state
def use(state: State, context):
    """Switch to a specific context (or alias)"""
    try:
        result = state.switcher.switch(context)
    except ParseError as e:
        click.echo(f"Error loading aliases: {e}")
        return
    except ContextNotFound as e:
        click.echo(f"Error: {e}")
        return
    except PersistError as e:
        click.echo(f"Error updating kubeconfig: {e}")
        return

    click.echo(f"Switched to context: {result.context}")


@cli.command()
@pass_state
def current(state: State):
    """Show the current context"""
    click.echo(f"Current context: {state.switcher.current_context()}")


@cli.group()
def alias():
    """Manage context aliases"""
    pass


@alias.command("add")
@click.argument("name")
@click.argument("context")
@pass_state
def alias_add(state: State, name, context):
    """Add an alias for a context"""
    try:
        added = add_alias(state.alias_storage, name, context, state.confirm)
    except ParseError as e:
        click.echo(f"Error loading aliases: {e}")
        return
    except PersistError as e:
        click.echo(f"Error saving aliases: {e}")
        return

    if not added:
        click.echo("Operation canceled.")
        return
    click.echo(f"Added alias: {name} -> {context}")


@alias.command("remove")
@click.argument("name")
@pass_state
def alias_remove(state: State, name):
    """Remove an alias"""
    try:
        state.alias_storage.remove(name)
    except ParseError as e:
        click.echo(f"Error loading aliases: {e}")
        return
    except AliasNotFound as e:
        click.echo(f"Error: {e}")
        return
    except PersistError as e:
        click.echo(f"Error saving aliases: {e}")
        return

    click.echo(f"Removed alias: {name}")


@alias.command("list")
@pass_state
def alias_list(state: State):
    """List all aliases"""
    try:
        aliases = state.alias_storage.aliases()
    except ParseError as e:
        click.echo(f"Error loading aliases: {e}")
        return

    if not aliases:
        click.echo("No aliases defined.")
        return

    click.echo("Aliases:")
    for name in sorted(aliases):
        click.echo(f"- {name} -> {aliases[name]}")


@cli.command()
@click.argument("shell", shell_complete=lambda ctx, param, incomplete: [
    s for s in SUPPORTED_SHELLS if s.startswith(incomplete)])
@click.pass_context
def completion(ctx, shell):
    """Generate autocompletion script for the specified shell

    \b
    To enable autocompletion, run the following command:
    For Bash: source <(kubex completion bash)
    For Zsh: source <(kubex completion zsh)
    For Fish: kubex completion fish | source
    """
    comp_cls = get_completion_class(shell) if shell in SUPPORTED_SHELLS else None
    if comp_cls is None:
        click.echo("Unsupported shell. Use 'bash', 'zsh', or 'fish'.")
        return

    root = ctx.find_root()
    comp = comp_cls(root.command, {}, "kubex", COMPLETE_VAR)
    click.echo(comp.source())


if __name__ == "__main__":
    cli()
