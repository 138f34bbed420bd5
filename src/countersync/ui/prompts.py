from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt

DEFAULT_TRUNCATION_DEPTH = 2


class Prompter:
    """Asks the operator questions on the terminal. Each call blocks for one answer."""

    def __init__(self, console=None):
        self.console = console or Console()

    def pick_value(self, values, message):
        """
        Single choice between ``values``.

        :return: The only value without asking when there is exactly one,
                 ``None`` when there are none.
        """
        values = list(values)
        if len(values) < 1:
            return None

        if len(values) == 1:
            return values[0]

        for index, value in enumerate(values, start=1):
            self.console.print(f"  [cyan]{index}[/cyan]) {value}", highlight=False)

        choice = IntPrompt.ask(
            f"[?] {message}",
            console=self.console,
            choices=[str(i) for i in range(1, len(values) + 1)],
            show_choices=False,
        )
        return values[choice - 1]

    def ask_text(self, name, required=False, type_label=None):
        """Free text for one variable; an empty answer means "not provided"."""
        label = f"{name}{'!' if required else ''}"
        if type_label:
            label += f" [dim]({type_label})[/dim]"
        return Prompt.ask(label, console=self.console, default="", show_default=False)

    def ask_depth(self, default=DEFAULT_TRUNCATION_DEPTH):
        while True:
            depth = IntPrompt.ask(
                "[?] What depth would you like to truncate the fields to?",
                console=self.console,
                default=default,
            )
            if depth > 0:
                return depth
            self.console.print("[red]Input must be a positive integer[/red]")

    def confirm(self, message, default=False):
        return Confirm.ask(f"[?] {message}", console=self.console, default=default)
