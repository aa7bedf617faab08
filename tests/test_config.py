import json

import pytest

from paxi.config import (
    BenchmarkConfig,
    Config,
    default_config,
    get_config,
    set_config,
)
from paxi.ident import ID


def test_default_config_values():
    cfg = default_config()
    assert cfg.policy == "consecutive"
    assert cfg.threshold == 3
    assert cfg.buffer_size == 1024
    assert cfg.chan_buffer_size == 1024
    assert cfg.multiversion is False
    assert cfg.n() == 0
    assert cfg.z() == 0


def test_default_benchmark_values():
    bench = BenchmarkConfig()
    assert bench.t == 60
    assert bench.k == 1000
    assert bench.w == 0.5
    assert bench.distribution == "uniform"
    assert bench.linearizability_check is True
    assert bench.conflicts == 100
    assert bench.sigma == 60
    assert bench.speed == 500
    assert bench.lambda_ == 0.01


def test_benchmark_dict_uses_field_names():
    data = BenchmarkConfig().to_dict()
    assert data["T"] == 60
    assert data["Distribution"] == "uniform"
    assert data["Lambda"] == 0.01
    assert BenchmarkConfig.from_dict(data) == BenchmarkConfig()


def test_benchmark_from_dict_is_case_insensitive_and_partial():
    bench = BenchmarkConfig.from_dict({"t": 5, "DISTRIBUTION": "zipfan"})
    assert bench.t == 5
    assert bench.distribution == "zipfan"
    assert bench.k == BenchmarkConfig().k


def test_benchmark_from_dict_rejects_wrong_type():
    with pytest.raises(TypeError):
        BenchmarkConfig.from_dict({"K": "many"})


def test_config_dict_round_trip():
    cfg = Config(
        addrs={ID("1.1"): "tcp://127.0.0.1:1735", ID("2.1"): "tcp://127.0.0.1:1736"},
        http_addrs={ID("1.1"): "http://127.0.0.1:8080", ID("2.1"): "http://127.0.0.1:8081"},
        thrifty=True,
    )
    assert Config.from_dict(cfg.to_dict()) == cfg


def test_str_is_json():
    cfg = Config(addrs={ID("1.1"): "tcp://127.0.0.1:1735"})
    data = json.loads(str(cfg))
    assert data["address"] == {"1.1": "tcp://127.0.0.1:1735"}
    assert data["policy"] == "consecutive"


def test_load_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "address": {
            "1.1": "tcp://127.0.0.1:1735",
            "1.2": "tcp://127.0.0.1:1736",
            "2.1": "tcp://127.0.0.1:1737",
        },
        "http_address": {"1.1": "http://127.0.0.1:8080"},
        "thrifty": True,
        "benchmark": {"N": 100},
    }))
    cfg = default_config()
    cfg.load(path)
    assert cfg.n() == 3
    assert cfg.z() == 2
    assert sorted(cfg.ids()) == ["1.1", "1.2", "2.1"]
    assert cfg.thrifty is True
    assert cfg.benchmark.n == 100
    assert cfg.benchmark.t == BenchmarkConfig().t
    assert cfg.http_addrs[ID("1.1")] == "http://127.0.0.1:8080"


def test_save_then_load(tmp_path):
    path = tmp_path / "saved.json"
    cfg = Config(addrs={ID("3.2"): "tcp://127.0.0.1:1740"}, policy="majority")
    cfg.save(path)
    loaded = Config()
    loaded.load(path)
    assert loaded == cfg


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config().load(tmp_path / "absent.json")


def test_set_and_get_config():
    previous = get_config()
    replacement = Config(policy="majority")
    try:
        set_config(replacement)
        assert get_config() is replacement
    finally:
        set_config(previous)
    assert get_config() is previous