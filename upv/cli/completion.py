"""Static shell completion scripts for the UPV CLI.

The script is generated from the command tree behind the Typer app, so it
always matches the current grammar and is identical every time it is
generated. No command is executed while completing.
"""

from typing import Any

SUPPORTED_SHELLS = ("powershell", "bash")


def build_grammar(command: Any) -> dict[str, list[str]]:
    """
    Flatten a command tree into completion candidates per command path.

    Keys are space separated command paths ("" for the root, "vpn",
    "vpn purge"); values are sorted subcommands, then option names, then
    argument choices.
    """
    grammar: dict[str, list[str]] = {}

    def walk(cmd: Any, path: tuple[str, ...]) -> None:
        words: list[str] = []

        # Recognised by behaviour: newer Typer releases ship their own click classes
        if hasattr(cmd, "list_commands"):
            ctx = cmd.context_class(cmd, info_name=" ".join(path) or cmd.name)
            names = []
            for name in cmd.list_commands(ctx):
                sub = cmd.get_command(ctx, name)
                if sub is None or sub.hidden:
                    continue
                names.append(name)
                walk(sub, path + (name,))
            words.extend(sorted(names))

        options: set[str] = set()
        choices: list[str] = []
        for param in cmd.params:
            if param.param_type_name == "option":
                if getattr(param, "hidden", False):
                    continue
                options.update(opt for opt in param.opts + param.secondary_opts if opt.startswith("--"))
            elif getattr(param.type, "choices", None):
                choices.extend(str(getattr(choice, "value", choice)) for choice in param.type.choices)
        options.add("--help")

        words.extend(sorted(options))
        words.extend(sorted(set(choices)))
        grammar[" ".join(path)] = words

    walk(command, ())
    return dict(sorted(grammar.items()))


def _ps_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def powershell_script(grammar: dict[str, list[str]], prog_name: str) -> str:
    """Render a Register-ArgumentCompleter script."""
    entries = "\n".join(
        f"        {_ps_quote(path)} = @({', '.join(_ps_quote(w) for w in words)})"
        for path, words in grammar.items()
    )

    return f"""# {prog_name} PowerShell completion
# Add this line to your PowerShell profile ($PROFILE):
#   {prog_name} completions powershell | Out-String | Invoke-Expression
Register-ArgumentCompleter -Native -CommandName {_ps_quote(prog_name)}, {_ps_quote(prog_name + ".exe")} -ScriptBlock {{
    param($wordToComplete, $commandAst, $cursorPosition)

    $grammar = @{{
{entries}
    }}

    $path = @()
    foreach ($element in ($commandAst.CommandElements | Select-Object -Skip 1)) {{
        if ($element.Extent.EndOffset -ge $cursorPosition) {{ break }}
        $text = $element.ToString()
        if ($text.StartsWith('-')) {{ continue }}
        $candidate = (@($path) + $text) -join ' '
        if ($grammar.ContainsKey($candidate)) {{ $path = @($path) + $text }}
    }}

    $key = @($path) -join ' '
    $grammar[$key] | Where-Object {{ $_ -like "$wordToComplete*" }} | ForEach-Object {{
        [System.Management.Automation.CompletionResult]::new($_, $_, 'ParameterValue', $_)
    }}
}}
"""


def bash_script(grammar: dict[str, list[str]], prog_name: str) -> str:
    """Render a bash ``complete -F`` script."""
    func = "_" + "".join(ch if ch.isalnum() else "_" for ch in prog_name)
    cases = "\n".join(
        f'        "{path}") echo "{" ".join(words)}" ;;'
        for path, words in grammar.items()
    )

    return f"""# {prog_name} bash completion
# Add this line to ~/.bashrc:
#   eval "$({prog_name} completions bash)"
{func}_words() {{
    case "$1" in
{cases}
        *) return 1 ;;
    esac
}}

{func}_complete() {{
    local cur word candidate path=""
    cur="${{COMP_WORDS[COMP_CWORD]}}"
    for word in "${{COMP_WORDS[@]:1:COMP_CWORD-1}}"; do
        case "$word" in
            -*) continue ;;
        esac
        if [ -z "$path" ]; then candidate="$word"; else candidate="$path $word"; fi
        if {func}_words "$candidate" >/dev/null; then path="$candidate"; fi
    done
    COMPREPLY=( $(compgen -W "$({func}_words "$path")" -- "$cur") )
}}

complete -F {func}_complete {prog_name}
"""


def generate_completion_script(command: Any, shell: str = "powershell", prog_name: str = "upv") -> str:
    """
    Generate the completion script for a shell.

    Raises:
        ValueError: If the shell is not supported
    """
    shell = shell.lower()
    grammar = build_grammar(command)
    if shell == "powershell":
        return powershell_script(grammar, prog_name)
    if shell == "bash":
        return bash_script(grammar, prog_name)
    raise ValueError(f"Unsupported shell: {shell}. Valid shells: {', '.join(SUPPORTED_SHELLS)}")
