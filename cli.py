# cli.py
import argparse
import sys
from datetime import datetime
from typing import List, Optional
from urllib.parse import urljoin

import requests
from rich.console import Console, Group
from rich.table import Table
from rich.panel import Panel
from rich.columns import Columns
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich.markup import escape
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from catalog_app.config import config
from catalog_app.controller import InteractionController, init
from catalog_app.core import ALL_CATEGORIES
from catalog_app.log import setup_logger
from catalog_app.render import Card, ErrorNotice, Surface
from catalog_app.share import PLATFORMS, REGISTER_LINK, copy_link, share
from catalog_sdk.catalog_client import CatalogClient

console = Console()

status_message = ""

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})

COMMANDS = ["search", "category", "sort", "qty", "clear", "copy", "share", "images", "help", "quit"]

HELP = """\
[bold cyan]search[/bold cyan] <text>        filter by sku, name, brand, category, description
[bold cyan]category[/bold cyan] <name|all>  show one category
[bold cyan]sort[/bold cyan] <mode>          name-asc, name-desc, price-asc, price-desc, sku-asc, sku-desc
[bold cyan]qty[/bold cyan] <sku> <n>        set the quantity of a shown product
[bold cyan]clear[/bold cyan]                set every quantity to 0
[bold cyan]copy[/bold cyan]                 copy the register link
[bold cyan]share[/bold cyan] <platform>     whatsapp, facebook, x, instagram
[bold cyan]images[/bold cyan]               check product images, swap broken ones for the logo
[bold cyan]quit[/bold cyan]"""


# ---------------------------
# Display helpers
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Catalog Browser",
        "[bold blue]Search, filter and build a cart[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def show_summary(surface: Surface):
    grid = Table.grid(padding=(0, 3))
    grid.add_column()
    grid.add_column()
    grid.add_column()
    grid.add_row(
        f"[dim]{escape(surface.results_meta)}[/dim]",
        f"🛒 Items: [bold]{surface.cart_count}[/bold]",
        f"Subtotal: [bold green]{escape(surface.cart_subtotal)}[/bold green] [dim](excl vat)[/dim]",
    )
    category = surface.category_select.value
    filters = Text.assemble(
        ("search: ", "dim"), surface.search_input.value or "-", "  ",
        ("category: ", "dim"), "all" if category == ALL_CATEGORIES else category, "  ",
        ("sort: ", "dim"), surface.sort_select.value,
    )
    console.print(Panel(Group(grid, filters), border_style="yellow"))


def card_panel(card: Card):
    body = Text()
    body.append("  ".join(f"[{b}]" for b in card.badges), style="cyan")
    body.append("\n")
    if card.description:
        body.append(card.description + "\n", style="italic")
    body.append(f"🖼  {card.image.src}\n", style="dim")
    body.append(card.price, style="bold green")
    body.append(f" {card.vat_note}\n", style="dim")
    body.append("Qty: ", style="bold")
    body.append(card.qty_field.value, style="bold magenta" if card.qty_field.value != "0" else "")
    return Panel(body, title=f"[bold]{escape(card.title)}[/bold]", box=box.ROUNDED, width=44)


def show_error(notice: ErrorNotice):
    console.print(Panel.fit(
        f"[red][bold]Error:[/bold] {escape(notice.message)}[/red]\n[dim]{escape(notice.hint)}[/dim]",
        title="❌ Could not load products",
        border_style="red",
    ))


def show_surface(surface: Surface):
    show_summary(surface)
    if isinstance(surface.items_grid, ErrorNotice):
        show_error(surface.items_grid)
        return
    if not surface.cards:
        console.print("[italic yellow]No products found[/italic yellow]")
        return
    console.print(Columns([card_panel(c) for c in surface.cards]))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{escape(message)}[/{style}]", title="Status")


def show_link(link: str):
    # fallback copy: put the link on screen so it can be selected
    console.print(Panel.fit(f"[bold]{escape(link)}[/bold]", title="Select and copy this link", border_style="cyan"))


# ---------------------------
# Images
# ---------------------------
def probe_images(surface: Surface, base_url: str, session=None, timeout: int = 5) -> int:
    """
    Request every card image; the ones that fail get their error handlers fired.
    Returns how many failed.
    """
    session = session or requests.Session()
    failed = 0
    for img in surface.images():
        url = urljoin(base_url, img.src)
        try:
            r = session.head(url, timeout=timeout)
            ok = 200 <= r.status_code < 300
        except requests.exceptions.RequestException:
            ok = False
        if not ok:
            failed += 1
            img.fail()
    return failed


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_completer(surface: Surface):
    words = list(COMMANDS) + list(PLATFORMS) + ["all"]
    words += [v for v in surface.category_select.option_values if v != ALL_CATEGORIES]
    words += surface.sort_select.option_values
    words += [c.sku for c in surface.cards]
    return WordCompleter(words, ignore_case=True)


# ---------------------------
# Command dispatch
# ---------------------------
def handle_command(line: str, surface: Surface, controller: Optional[InteractionController], data_url: str = "") -> bool:
    """
    Turn one typed line into one control event. Returns False when the user quits.
    """
    global status_message
    parts = line.strip().split(None, 1)
    if not parts:
        return True
    cmd = parts[0].lower()
    rest = parts[1].strip() if len(parts) > 1 else ""

    if cmd in ("q", "quit", "exit"):
        return False

    if cmd == "help":
        console.print(Panel(HELP, title="📋 Commands", border_style="yellow"))
        return True

    if cmd == "copy":
        status_message = copy_link(REGISTER_LINK, select=show_link)
        return True

    if cmd == "share":
        if rest not in PLATFORMS:
            status_message = f"Error: choose one of {', '.join(PLATFORMS)}"
            return True
        status_message = share(rest, REGISTER_LINK, select=show_link)
        return True

    if controller is None:
        status_message = "Error: catalog not loaded, restart to try again"
        return True

    if cmd == "search":
        surface.search_input.input(rest)
        status_message = f"Search: '{rest}'" if rest else "Search cleared"

    elif cmd == "category":
        value = ALL_CATEGORIES if rest.lower() in ("", "all") else rest
        if value not in surface.category_select.option_values:
            status_message = f"Error: unknown category '{rest}'"
            return True
        surface.category_select.input(value)
        status_message = f"Category: {rest or 'all'}"

    elif cmd == "sort":
        if rest not in surface.sort_select.option_values:
            status_message = f"Error: unknown sort mode '{rest}'"
            return True
        surface.sort_select.input(rest)
        status_message = f"Sorted by {rest}"

    elif cmd == "qty":
        # the quantity is the last word; the sku may contain spaces
        args = rest.rsplit(None, 1)
        if len(args) != 2:
            status_message = "Error: usage qty <sku> <n>"
            return True
        sku, raw = args
        field = surface.get_element(f"qty-{sku}")
        if field is None:
            status_message = f"Error: {sku} is not shown"
            return True
        field.input(raw)
        status_message = f"{sku} quantity set to {field.value}"

    elif cmd == "clear":
        surface.clear_cart_btn.click()
        status_message = "Cart cleared"

    elif cmd == "images":
        failed = probe_images(surface, data_url or config.DATA_URL)
        status_message = f"{failed} image(s) replaced with the fallback"

    else:
        status_message = f"Error: unknown command '{cmd}' (try help)"

    return True


# ---------------------------
# Main loop
# ---------------------------
def run(data_url: str):
    global status_message

    console.clear()
    console.print(create_header())

    surface = Surface()
    client = CatalogClient(data_url=data_url)
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
    ) as progress:
        progress.add_task(description="Loading catalog...", total=None)
        controller = init(client, surface)

    status_message = "Catalog loaded" if controller else ""

    while True:
        show_surface(surface)
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))
            status_message = ""

        line = prompt("\n> ", completer=get_completer(surface), style=custom_style)
        if not handle_command(line, surface, controller, data_url):
            console.print(Panel.fit("[bold green]Thanks for browsing! 👋[/bold green]", title="Goodbye"))
            return

        console.print()
        console.rule(style="dim")


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Terminal catalog browser")
    parser.add_argument("--data-url", default=config.DATA_URL, help="http(s) URL of items.json")
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ERROR")
    args = parser.parse_args(argv)

    setup_logger(args.log_level, console=console)

    try:
        run(args.data_url)
    except (KeyboardInterrupt, EOFError):
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
