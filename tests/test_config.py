from pathlib import Path

from functional_test_controller.config import load_config


def test_load_config_defaults(tmp_path: Path) -> None:
    config = load_config(env_file=tmp_path / "missing.env")

    assert config.browser.name == "chromium"
    assert config.browser.headless is True
    assert config.implicit_wait is None
    assert config.screenshots.path == Path("reports/screenshots")
    assert config.screenshots.take_on_fails is True


def test_load_config_reads_env_file(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text(
        "\n".join(
            [
                "FUNCTIONAL_TEST_CONTROLLER_BROWSER__NAME=firefox",
                "FUNCTIONAL_TEST_CONTROLLER_BROWSER__HEADLESS=false",
                "FUNCTIONAL_TEST_CONTROLLER_IMPLICIT_WAIT=5",
                "FUNCTIONAL_TEST_CONTROLLER_SCREENSHOTS__PATH=out/shots",
            ]
        )
    )

    config = load_config(env_file=env_path)

    assert config.browser.name == "firefox"
    assert config.browser.headless is False
    assert config.implicit_wait == 5
    assert config.screenshots.path == Path("out/shots")


def test_load_config_prioritises_overrides(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("FUNCTIONAL_TEST_CONTROLLER_LAUNCH_TIMEOUT=3\n")

    config_path = tmp_path / "controller.yaml"
    config_path.write_text(
        "\n".join(
            [
                "browser:",
                "  name: webkit",
                "  viewport_width: 390",
                "screenshots:",
                "  take_on_fails: false",
            ]
        )
    )

    config = load_config(
        config_path,
        env_file=env_path,
        browser={"name": "chrome"},
    )

    assert config.browser.name == "chrome"
    assert config.browser.viewport_width == 390
    assert config.screenshots.take_on_fails is False
    assert config.launch_timeout == 3


def test_load_config_applies_browser_choices_last(tmp_path: Path) -> None:
    config_path = tmp_path / "controller.yaml"
    config_path.write_text("browser:\n  name: webkit\n  headless: true\n  has_touch: true\n")

    config = load_config(
        config_path,
        env_file=tmp_path / "missing.env",
        browser_name="firefox",
        headless=False,
    )

    assert config.browser.name == "firefox"
    assert config.browser.headless is False
    assert config.browser.has_touch is True


def test_load_config_ignores_unset_browser_choices(tmp_path: Path) -> None:
    config_path = tmp_path / "controller.yaml"
    config_path.write_text("browser:\n  name: webkit\n")

    config = load_config(
        config_path, env_file=tmp_path / "missing.env", browser_name=None, headless=None
    )

    assert config.browser.name == "webkit"
    assert config.browser.headless is True
