from pathlib import Path

from src.committee_attendance.committee_attendance.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_splitter_keeps_semicolons_inside_quotes_and_drops_comments():
    sql = "-- header; ignored\nINSERT INTO t VALUES ('a;b'); -- trailing\nSELECT 1;"

    assert list(_iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]


def test_schema_file_has_every_table():
    sql = _strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8"))
    statements = list(_iter_sql_statements(sql))

    created = [s.split()[5] for s in statements if s.upper().startswith("CREATE TABLE IF NOT EXISTS")]
    assert created == ["members", "teams", "team_members", "events", "attendance_records", "attendance_links"]
    assert not any(s.upper().startswith(("USE", "CREATE DATABASE")) for s in statements)


def test_strip_removes_database_header_only():
    sql = (
        "CREATE DATABASE IF NOT EXISTS committee_db;\n"
        "  use committee_db;\n"
        "CREATE TABLE IF NOT EXISTS users (id INT);\n"
        "INSERT INTO notes VALUES ('USE this; later');\n"
    )

    statements = list(_iter_sql_statements(_strip_create_db_and_use(sql)))

    assert statements == [
        "CREATE TABLE IF NOT EXISTS users (id INT)",
        "INSERT INTO notes VALUES ('USE this; later')",
    ]


def test_strip_on_shipped_schema_header():
    stripped = _strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8"))

    assert "committee_db" not in stripped
    assert "CREATE TABLE IF NOT EXISTS members" in stripped
