import run_tests


def test_defaults_to_tests_directory():
    assert run_tests.build_args([]) == ["-v", "--tb=short", "tests/"]


def test_keyword_filter_keeps_default_target():
    assert run_tests.build_args(["-k", "redirect"]) == ["-v", "--tb=short", "tests/", "-k", "redirect"]


def test_explicit_path_replaces_default_target():
    args = run_tests.build_args(["tests/test_api.py::TestRedirect", "-x"])
    assert args == ["-v", "--tb=short", "tests/test_api.py::TestRedirect", "-x"]


def test_main_returns_pytest_exit_code(monkeypatch, capsys):
    calls = []

    def fake_main(args):
        calls.append(args)
        return 1

    monkeypatch.chdir(run_tests.PROJECT_ROOT)
    monkeypatch.setattr(run_tests.pytest, "main", fake_main)

    assert run_tests.main(["-k", "nothing"]) == 1
    assert calls == [["-v", "--tb=short", "tests/", "-k", "nothing"]]
    assert "Tests failed with exit code 1" in capsys.readouterr().out
