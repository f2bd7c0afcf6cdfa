import click
from flask.cli import with_appcontext

from app.libs.errors import SearchUnavailable
from .config import InternalSearchConfig
from .language import Multilanguage
from .services import InternalSearch


@click.command("doofinder-status")
@with_appcontext
def doofinder_status():
    """Show the resolved internal search settings for every language."""
    multilanguage = Multilanguage()

    click.echo("🔎 Doofinder internal search")
    click.echo("=" * 50)
    for code in multilanguage.languages:
        prefix = multilanguage.get_language(code)["prefix"]
        config = InternalSearchConfig.from_settings(language=prefix)
        state = "enabled" if config.is_enabled() else "disabled"
        click.echo(f"[{code}] {state}")
        click.echo(f"   Hash ID: {config.hashid or '-'}")
        click.echo(f"   API key: {config.masked_api_key or '-'}")
        click.echo(f"   Results per page: {config.results_per_page}")


@click.command("doofinder-search")
@click.argument("term")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--per-page", default=20, show_default=True, type=int)
@with_appcontext
def doofinder_search(term, page, per_page):
    """Run a reconciled search and print the matching product IDs."""
    internal_search = InternalSearch(request_key="cli")
    if not internal_search.is_enabled():
        raise click.ClickException("Internal search is disabled or misconfigured")

    try:
        result = internal_search.search(
            {"search": term, "page": page, "per_page": per_page}
        )
    except SearchUnavailable as e:
        raise click.ClickException(e.message)

    if result is None:
        click.echo("Nothing to search for.")
        return

    click.echo(
        f"Found {result['found_items']} products "
        f"(page {page} of {result['total_pages']})"
    )
    for product_id in result["ids"]:
        click.echo(f"  • {product_id}")
    if internal_search.banner:
        click.echo(f"Banner: {internal_search.banner.get('id')}")
