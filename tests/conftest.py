import pook as pook_mod
import pytest

from aocdir.config import Config
from aocdir.config import NamingFormat
from aocdir.utils import _get_soup
from aocdir.utils import HttpClient


@pytest.fixture(autouse=True)
def mocked_sleep(mocker, monkeypatch):
    no_sleep_till_brooklyn = mocker.patch("time.sleep")
    # nerf the rate-limiter - tests don't actually talk to the AoC server at all
    monkeypatch.setattr(HttpClient, "_max_t", -1.0)
    return no_sleep_till_brooklyn


@pytest.fixture(autouse=True)
def clear_soup_cache():
    yield
    _get_soup.cache_clear()


@pytest.fixture
def aocdir_config_dir(tmp_path):
    config_dir = tmp_path / ".config" / "aocdir"
    config_dir.mkdir(parents=True)
    return config_dir


@pytest.fixture(autouse=True)
def remove_user_env(monkeypatch, aocdir_config_dir):
    monkeypatch.setattr("aocdir.config.AOCDIR_CONFIG_DIR", aocdir_config_dir)
    for name in "AOC_SESSION", "AOCDIR_DAY_PREFIX", "AOCDIR_YEAR_PREFIX":
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("http_proxy", raising=False)
    monkeypatch.delenv("https_proxy", raising=False)


@pytest.fixture
def test_token(aocdir_config_dir):
    token_file = aocdir_config_dir / "token"
    token_file.write_text("thetesttoken")
    return token_file


@pytest.fixture
def config(aocdir_config_dir):
    return Config(naming=NamingFormat(), session="thetesttoken", config_dir=aocdir_config_dir)


@pytest.fixture
def year_root(tmp_path):
    root = tmp_path / "advent-of-code-2022"
    root.mkdir()
    return root


@pytest.fixture
def day_dir(year_root):
    path = year_root / "day-07"
    path.mkdir()
    return path


@pytest.fixture
def pook():
    pook_mod.on()
    yield pook_mod
    pook_mod.off()
    pook_mod.reset()
