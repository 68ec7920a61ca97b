import pytest

import app.scripts.ensure_tables as ensure_tables
import app.scripts.issue_token as issue_token
from app.core.security import decode_access_token


class _Database:
    created = []

    def __init__(self, url):
        self.url = url
        self.disposed = False
        _Database.last = self

    def ensure_tables_exist(self):
        return list(self.created)

    def dispose(self):
        self.disposed = True


def test_ensure_tables_reports_created(monkeypatch, capsys):
    monkeypatch.setattr(ensure_tables, "Database", _Database)
    monkeypatch.setattr(_Database, "created", ["notifications", "users"])
    ensure_tables.main()
    assert "Created tables: notifications, users" in capsys.readouterr().out
    assert _Database.last.disposed is True


def test_ensure_tables_nothing_to_do(monkeypatch, capsys):
    monkeypatch.setattr(ensure_tables, "Database", _Database)
    monkeypatch.setattr(_Database, "created", [])
    ensure_tables.main()
    assert "all tables already exist" in capsys.readouterr().out


def test_issue_token_prints_valid_token(capsys):
    issue_token.main(["HR@Acme.example", "--minutes", "5"])
    token = capsys.readouterr().out.strip()
    assert decode_access_token(token) == "hr@acme.example"


def test_issue_token_rejects_non_email(capsys):
    with pytest.raises(SystemExit) as ex:
        issue_token.main(["not-an-email"])
    assert ex.value.code == 1
    assert "Not an email address" in capsys.readouterr().out
