import io

import pytest

from staticrange.controller.main_controller import EXIT_FAILURE, EXIT_OK, MainController
from staticrange.errors import DriverError


def make_controller(driver, console, settings, *lines, admin=True):
    stream = io.StringIO("".join(f"{line}\n" for line in lines))
    return MainController(driver=driver, console=console, settings=settings, stream=stream,
                          check_admin=lambda: admin)


ANSWERS = ["1", "10.103.35.100", "10.103.35.103", "24", "10.103.35.1", "8.8.8.8", ""]


def test_full_run(fake_driver_cls, adapter, console, settings):
    driver = fake_driver_cls(adapters=[adapter])
    code = make_controller(driver, console, settings, *ANSWERS, "y").run()

    assert code == EXIT_OK
    assert driver.calls[0] == ("clear", 12)
    assert driver.calls[1] == ("assign", "10.103.35.100", 24, "10.103.35.1")
    assert driver.calls[2] == ("dns", ("8.8.8.8",))
    assert driver.calls[-1] == ("query", 12)
    assert driver.assigned == ["10.103.35.100", "10.103.35.101", "10.103.35.102", "10.103.35.103"]
    assert "All 4 addresses configured" in console.file.getvalue()


def test_no_adapters(fake_driver_cls, console, settings):
    driver = fake_driver_cls(adapters=[])
    assert make_controller(driver, console, settings).run() == EXIT_FAILURE
    assert "No active network adapters" in console.file.getvalue()


def test_inverted_range_exits_with_failure(fake_driver_cls, adapter, console, settings):
    driver = fake_driver_cls(adapters=[adapter])
    code = make_controller(driver, console, settings, "1", "10.0.0.5", "10.0.0.1", "24", "", "8.8.8.8", "").run()
    assert code == EXIT_FAILURE
    assert driver.calls == []


def test_declined_confirmation_changes_nothing(fake_driver_cls, adapter, console, settings):
    driver = fake_driver_cls(adapters=[adapter])
    code = make_controller(driver, console, settings, *ANSWERS, "n").run()
    assert code == EXIT_OK
    assert driver.calls == []
    assert "nothing was changed" in console.file.getvalue()


def test_partial_failure_still_exits_ok(fake_driver_cls, adapter, console, settings):
    driver = fake_driver_cls(adapters=[adapter], fail_on={"10.103.35.102"})
    code = make_controller(driver, console, settings, *ANSWERS, "y").run()
    assert code == EXIT_OK
    assert driver.assigned == ["10.103.35.100", "10.103.35.101", "10.103.35.103"]
    assert "1 of 4 addresses failed" in console.file.getvalue()


def test_not_admin_warns(fake_driver_cls, adapter, console, settings):
    driver = fake_driver_cls(adapters=[adapter])
    make_controller(driver, console, settings, *ANSWERS, "n", admin=False).run()
    assert "not running as Administrator" in console.file.getvalue()


def test_clear_failure_is_ignored(fake_driver_cls, adapter, console, settings, monkeypatch):
    driver = fake_driver_cls(adapters=[adapter])

    def broken_clear(_adapter):
        raise RuntimeError("clear failed")

    monkeypatch.setattr(driver, "clear_configuration", broken_clear)
    code = make_controller(driver, console, settings, *ANSWERS, "y").run()
    assert code == EXIT_OK
    assert len(driver.assigned) == 4


@pytest.mark.parametrize("exc", [DriverError("no output"), RuntimeError("Get-NetIPAddress garbage"), ValueError("bad json shape")])
def test_unreadable_configuration_is_ignored(fake_driver_cls, adapter, console, settings, monkeypatch, exc):
    driver = fake_driver_cls(adapters=[adapter])

    def broken_query(_adapter):
        raise exc

    monkeypatch.setattr(driver, "get_configuration", broken_query)
    assert make_controller(driver, console, settings, *ANSWERS, "y").run() == EXIT_OK
    assert len(driver.assigned) == 4


def test_adapter_listing_error_counts_as_no_adapters(fake_driver_cls, console, settings, monkeypatch):
    driver = fake_driver_cls()

    def broken_listing():
        raise ValueError("invalid literal for int() with base 10: 'x'")

    monkeypatch.setattr(driver, "list_adapters", broken_listing)
    assert make_controller(driver, console, settings).run() == EXIT_FAILURE
    assert "No active network adapters" in console.file.getvalue()
    assert driver.calls == []


@pytest.mark.parametrize("exc", [KeyboardInterrupt, EOFError])
def test_main_cancel_exit_code(monkeypatch, settings, exc):
    from staticrange import __main__ as entry

    def interrupted(self):
        raise exc

    monkeypatch.setattr(entry.MainController, "run", interrupted)
    monkeypatch.setattr(entry, "setup_logging", lambda settings, console: None)
    with pytest.raises(SystemExit) as info:
        entry.main()
    assert info.value.code == entry.EXIT_CANCELLED
