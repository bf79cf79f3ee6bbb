# Overview: Flask CLI command groups for bootstrap, inspection, and maintenance.

# backend/stitchflow/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init [--overwrite]
#   Write seed values for every slice that has not been persisted yet.
# - python -m flask system reset-db --yes
#   DEV/TEST only: delete every persisted slice (the next read falls back to seeds).
#
# State inspection:
# - python -m flask state export [--output snapshot.json]
#   Dump every slice as one JSON document keyed by storage key.
# - python -m flask state show orders
#   Print one slice as JSON.
#
# Staff and reports:
# - python -m flask staff list
#   List staff accounts with salary and workload.
# - python -m flask reports summary
#   Print the headline financial figures.

import json

import click
from flask.cli import with_appcontext

from .extensions import db
from .money import format_money
from .services import store_service, reporting_service
from .services.state_service import AppState


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init')
@click.option('--overwrite', is_flag=True, help='Rewrite slices that already exist with their seeds')
@with_appcontext
def init_system(overwrite):
    """
    Initialize StitchFlow storage: seed services, inventory, staff and settings.

    Idempotent: slices that already hold data are left alone unless
    --overwrite is given. The signed-in user slice is never seeded.
    """
    click.echo("START Initializing StitchFlow state...")
    db.create_all()

    written = store_service.seed_all(overwrite=overwrite)
    if written:
        click.echo(f"PASS Seeded slices: {', '.join(written)}")
    else:
        click.echo("PASS All slices already present, nothing to seed")

    click.echo("\nDefault accounts (sign in by username):")
    click.echo("   admin -> OWNER")
    click.echo("   john  -> TAILOR")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Delete every persisted slice.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    removed = store_service.reset()
    click.echo(f"DELETE  Removed {removed} slice rows")
    click.echo("PASS Reset complete. Run 'python -m flask system init' to reseed.")


@click.group('state')
def state_group():
    """Persisted state inspection commands."""


@state_group.command('export')
@click.option('--output', type=click.Path(dir_okay=False, writable=True), help='Write to a file instead of stdout')
@with_appcontext
def export_state(output):
    """Export every slice as one JSON document."""
    document = json.dumps(store_service.export_snapshot(), indent=2, ensure_ascii=False)
    if output:
        with open(output, "w", encoding="utf-8") as handle:
            handle.write(document)
        click.echo(f"PASS Exported {len(store_service.ALL_SLICES)} slices to {output}")
    else:
        click.echo(document)


@state_group.command('show')
@click.argument('slice_name', type=click.Choice(store_service.ALL_SLICES))
@with_appcontext
def show_slice(slice_name):
    """Print one slice as JSON."""
    value = store_service.encode(slice_name, store_service.load(slice_name))
    click.echo(json.dumps(value, indent=2, ensure_ascii=False))


@click.group('staff')
def staff_group():
    """Staff inspection commands."""


@staff_group.command('list')
@with_appcontext
def list_staff():
    """List staff accounts with salary and workload."""
    state = AppState.load()
    if not state.staff:
        click.echo("No staff found.")
        return

    currency = state.settings.currency if state.settings else ""
    rows = reporting_service.staff_overview(state.orders, state.staff)

    click.echo("\n" + "="*90)
    click.echo(f"{'ID':<15} {'Name':<20} {'Role':<8} {'Salary':<12} {'Last paid':<12} {'Active':<7} {'Done':<6} {'Rate'}")
    click.echo("="*90)

    for row in rows:
        salary = format_money(row["salary"], currency) if row["salary"] else "-"
        click.echo(
            f"{row['staff_id']:<15} {row['name']:<20} {row['role']:<8} {salary:<12} "
            f"{row['last_salary_paid'] or '-':<12} {row['active']:<7} {row['completed']:<6} {row['completion_rate']}%"
        )

    click.echo("="*90 + "\n")


@click.group('reports')
def reports_group():
    """Report commands."""


@reports_group.command('summary')
@with_appcontext
def report_summary():
    """Print revenue, expenses, profit, tax and delivery efficiency."""
    state = AppState.load()
    report = reporting_service.full_report(state)
    currency = report["currency"] or ""

    click.echo(f"Revenue:             {format_money(report['revenue'], currency)}")
    click.echo(f"Tax liability:       {format_money(report['tax_liability'], currency)}")
    click.echo(f"Expenses:            {format_money(report['total_expenses'], currency)}")
    click.echo(f"Profit:              {format_money(report['profit'], currency)}")
    click.echo(f"Delivery efficiency: {report['delivery_efficiency']}%")
    click.echo(f"Low stock items:     {len(reporting_service.low_stock_items(state.inventory))}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(state_group)
    app.cli.add_command(staff_group)
    app.cli.add_command(reports_group)
