"""
Command group used by every Typer app of the CLI.
"""

import typer
from typer.core import TyperGroup


class UPVGroup(TyperGroup):
    """Typer group that lists the valid subcommands when an unknown one is given."""

    def resolve_command(self, ctx: typer.Context, args: list[str]):
        cmd_name = str(args[0]) if args else ""
        if (
            cmd_name
            and not cmd_name.startswith("-")
            and not ctx.resilient_parsing
            and self.get_command(ctx, cmd_name) is None
        ):
            available = ", ".join(
                name for name in self.list_commands(ctx)
                if not getattr(self.get_command(ctx, name), "hidden", False)
            )
            ctx.fail(f"No such command '{cmd_name}'. Available commands: {available}")
        return super().resolve_command(ctx, args)
