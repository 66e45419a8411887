from src.paytracker.paytracker.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use


def test_splits_on_semicolons_outside_quotes():
    sql = """
    -- demo company
    INSERT INTO companies (name) VALUES ('Demo; SARL');
    INSERT INTO departments (name) VALUES ("Logistique");
    UPDATE companies SET description='l\\'atelier' WHERE company_id=1
    """

    statements = list(_iter_sql_statements(sql))

    assert len(statements) == 3
    assert statements[0] == "INSERT INTO companies (name) VALUES ('Demo; SARL')"
    assert statements[2].startswith("UPDATE companies")


def test_create_database_and_use_are_dropped():
    sql = "CREATE DATABASE IF NOT EXISTS paytracker_db CHARACTER SET utf8mb4;\nUSE paytracker_db;\nSELECT 1;"

    assert list(_iter_sql_statements(_strip_create_db_and_use(sql))) == ["SELECT 1"]
