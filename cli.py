# cli.py - interactive warehouse console over InventorySync
import argparse
import asyncio
import sys
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from bazar import config
from bazar.errors import BazarError
from bazar.fallback import FallbackCatalog
from bazar.gateway import ProductGateway
from bazar.inventory import InventoryEvent, InventorySync
from bazar.logging_config import setup_logging
from bazar.models import Phase, Product
from bazar.session import Session

console = Console()

# One loop for the whole session; the sync component and its http clients live on it.
_loop = asyncio.new_event_loop()

NOTICE_STYLES = {"info": "green", "warning": "yellow", "error": "red"}

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


def run(coro):
    return _loop.run_until_complete(coro)


# ---------------------------
# Display helpers
# ---------------------------
def show_products(sync: InventorySync, products: Sequence[Product]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Warehouse",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=28)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Old", justify="right", width=10)
    table.add_column("Stock", justify="right", width=7)
    table.add_column("Category", width=15)

    for p in products:
        category = sync.category_for(p)
        table.add_row(
            p.id[:12] or "N/A",
            p.name or "N/A",
            f"${p.price:.2f}",
            f"[strike]${p.old_price:.2f}[/strike]" if p.old_price is not None else "",
            str(p.stock),
            category.name if category else (p.category_id or str(getattr(p, "category", "") or "N/A"))
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def on_event(event: InventoryEvent):
    if event.notice is None:
        return
    style = NOTICE_STYLES.get(event.notice.level, "white")
    console.print(Panel.fit(f"[{style}]{event.notice.message}[/{style}]", title=event.notice.level.title()))


# ---------------------------
# Wrapper with spinner + error reporting
# ---------------------------
def try_op(fn, *args):
    """
    Runs the coroutine fn(*args) on the session loop with a spinner.
    Local errors (validation, not found, access) are reported, not raised.
    """
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            return run(fn(*args))
    except BazarError as e:
        console.print(show_status(f"Error: {e}", False))
        return None


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def product_completer(sync: InventorySync):
    return WordCompleter([p.id for p in sync.products if p.id], ignore_case=True)


def ask_category(sync: InventorySync, default: str = "") -> str:
    by_name = {c.name: c.id for c in sync.categories}
    current = next((c.name for c in sync.categories if c.id == default), default)
    answer = prompt_with_autocomplete(
        "🏷️ Category", completer=WordCompleter(list(by_name), ignore_case=True), default=current
    ).strip()
    return by_name.get(answer, answer)


def product_form(sync: InventorySync, existing: Optional[Product] = None) -> Dict[str, Any]:
    base = existing or Product()
    return {
        "name": prompt_with_autocomplete("Product name", default=base.name).strip(),
        "price": ask_float("💰 Price", default=base.price if existing else 10.0),
        "stock": IntPrompt.ask("📦 Stock", default=base.stock if existing else 1),
        "categoryId": ask_category(sync, base.category_id),
        "image": prompt_with_autocomplete("🖼️ Image URL", default=base.image or "").strip(),
        "description": prompt_with_autocomplete("Description", default=base.description).strip(),
    }


def changed_fields(existing: Product, form: Dict[str, Any]) -> Dict[str, Any]:
    wire = existing.to_wire()
    return {k: v for k, v in form.items() if wire.get(k) != v}


def create_header(session: Session):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Bazar Warehouse",
        f"[bold blue]{session.user_email or 'anonymous'} ({session.role})[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu(sync: InventorySync):
    console.clear()
    console.print(create_header(sync.session))

    try_op(sync.load)

    while True:
        if sync.phase is Phase.ERROR:
            console.print(show_status(f"Inventory unavailable: {sync.error}", False))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in [
            ("1", "📦 List products"),
            ("2", "➕ Add product"),
            ("3", "✏️ Edit product"),
            ("4", "🗑️ Delete product"),
            ("5", "🔄 Reload"),
            ("q", "👋 Quit"),
        ]:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(["1", "2", "3", "4", "5", "q", "quit", "exit"])
        ).strip()

        if choice == "1":
            show_products(sync, sync.products)

        elif choice == "2":
            form = product_form(sync)
            product = try_op(sync.create, form)
            if product:
                show_products(sync, [product])

        elif choice == "3":
            pid = prompt_with_autocomplete("Enter product ID", completer=product_completer(sync)).strip()
            existing = sync.get(pid)
            if existing is None:
                console.print(show_status(f"No product with id {pid}", False))
                continue
            draft = changed_fields(existing, product_form(sync, existing))
            if not draft:
                console.print("[italic yellow]Nothing changed[/italic yellow]")
                continue
            product = try_op(sync.update, pid, draft)
            if product:
                show_products(sync, [product])

        elif choice == "4":
            pid = prompt_with_autocomplete("Enter product ID", completer=product_completer(sync)).strip()
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                try_op(sync.delete, pid)

        elif choice == "5":
            try_op(sync.load)
            show_products(sync, sync.products)

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                return

        console.print()
        console.rule(style="dim")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Bazar warehouse console")
    parser.add_argument("--api-url", default=config.API_URL, help="Product API base URL")
    parser.add_argument("--fallback-url", default=config.FALLBACK_URL, help="Read-only fallback catalog URL")
    parser.add_argument("--email", default=None, help="Signed-in user email")
    parser.add_argument("--role", default="admin", choices=["admin", "user"], help="Session role")
    args = parser.parse_args(argv)

    setup_logging(console=console)
    gateway = ProductGateway(args.api_url)
    fallback = FallbackCatalog(args.fallback_url)
    sync = InventorySync(gateway, fallback, Session(user_email=args.email, role=args.role))
    sync.subscribe(on_event)
    try:
        menu(sync)
    finally:
        sync.close()
        run(gateway.aclose())
        run(fallback.aclose())
        _loop.close()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
