from rich.tree import Tree

from countersync.translators.selection import LeafField, ObjectField


def _add_nodes(branch, selection):
    for node in selection or ():
        if isinstance(node, LeafField):
            branch.add(node.name)
        elif isinstance(node, ObjectField):
            label = node.selection_name
            if node.field_name and node.field_name != node.type_name:
                label = f"{node.field_name} [dim]({node.type_name})[/dim]"
            _add_nodes(branch.add(f"[bold]{label}[/bold]"), node.children)


def selection_tree(selection, title):
    """Rich ``Tree`` of a selection; ``title`` labels the root."""
    if isinstance(selection, ObjectField):
        selection = selection.children
    tree = Tree(f"[bold cyan]{title}[/bold cyan]")
    _add_nodes(tree, selection)
    return tree


def print_selection(console, selection, title):
    console.print(selection_tree(selection, title))


def print_query(console, operation):
    console.print("[blue][+] Assembled query:[/blue]")
    console.print(operation.query, markup=False, highlight=False)
    if operation.variables:
        console.print("[blue][+] Variables:[/blue]")
        console.print_json(data=operation.variable_values)
    console.print("")


def print_response(console, response):
    """GraphQL errors are shown in red, data in blue."""
    errors = response.get("errors")
    if errors:
        console.print("[red][!] Got errors from GraphQL:[/red]")
        console.print_json(data=errors)
    else:
        console.print("[blue][+] Got response from GraphQL:[/blue]")
        console.print_json(data=response.get("data"))
    console.print("")
