from tinylink_app.database import manage
from tinylink_app.models.link import Link


def test_init_and_check(db_session, capsys):
    assert manage.main(["init"]) == 0
    assert "Database initialized" in capsys.readouterr().out

    db_session.add(Link(code="cli123", url="https://example.com/"))
    db_session.commit()

    assert manage.main(["check"]) == 0
    out = capsys.readouterr().out
    assert "DB connection OK" in out
    assert "links" in out
    assert "Links count: 1" in out
