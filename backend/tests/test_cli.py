"""
CLI command tests (flask system/state/staff/reports groups).
"""

import json

from stitchflow.extensions import db
from stitchflow.models import StateSlice


def test_system_init_is_idempotent(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["system", "init"])
    assert result.exit_code == 0
    assert "Seeded slices" in result.output

    result = runner.invoke(args=["system", "init"])
    assert "nothing to seed" in result.output

    with app.app_context():
        assert db.session.get(StateSlice, "stitchflow_staff") is not None
        assert db.session.get(StateSlice, "stitchflow_user") is None


def test_reset_db_requires_confirmation(app):
    runner = app.test_cli_runner()
    runner.invoke(args=["system", "init"])

    result = runner.invoke(args=["system", "reset-db"], input="n\n")
    assert result.exit_code != 0

    result = runner.invoke(args=["system", "reset-db", "--yes"])
    assert result.exit_code == 0
    assert "Removed 8 slice rows" in result.output


def test_state_show_and_export(app, tmp_path):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["state", "show", "services"])
    assert result.exit_code == 0
    assert [s["name"] for s in json.loads(result.output)][0] == "Standard Shirt Stitching"

    target = tmp_path / "snapshot.json"
    result = runner.invoke(args=["state", "export", "--output", str(target)])
    assert result.exit_code == 0
    snapshot = json.loads(target.read_text(encoding="utf-8"))
    assert snapshot["stitchflow_settings"]["shop_name"] == "StitchFlow Pro"


def test_state_show_rejects_unknown_slice(app):
    result = app.test_cli_runner().invoke(args=["state", "show", "invoices"])
    assert result.exit_code != 0


def test_staff_list_and_report_summary(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["staff", "list"])
    assert result.exit_code == 0
    assert "John Tailor" in result.output
    assert "₹15,000" in result.output

    result = runner.invoke(args=["reports", "summary"])
    assert result.exit_code == 0
    assert "Revenue:             ₹0" in result.output
    assert "Delivery efficiency: 0%" in result.output
