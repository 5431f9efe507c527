import pytest
import os
from unittest.mock import patch
import logging

from model_math.core.base.exceptions import ConfigurationError
from model_math.core.config.settings import (
    RuntimeConfig,
    configure_logging,
    get_config,
    set_config,
    reset_config,
    update_config,
    load_config_from_env,
    DEFAULT_LAMBERT_W_EPSILON,
    MINIMUM_TEMPORARY_BUFFER_SIZE,
)

# Disable all logging for tests to keep output clean
logging.disable(logging.CRITICAL)


@pytest.fixture
def runtime_config_data():
    return {
        "error_policy": "raise",
        "log_level": "debug",
        "rng_type": "PCG64",
        "rng_seed": 42,
        "lambert_w_epsilon": 1e-12,
        "temporary_buffer_size": 4096,
    }


class TestRuntimeConfig:
    def test_initialization_defaults(self):
        cfg = RuntimeConfig()
        assert cfg.error_policy == "log"
        assert cfg.log_level == "WARNING"
        assert cfg.rng_type == "mt19937"
        assert cfg.rng_seed is None
        assert cfg.lambert_w_epsilon == DEFAULT_LAMBERT_W_EPSILON
        assert cfg.temporary_buffer_size == 2048

    def test_initialization_custom_normalizes_case(self, runtime_config_data):
        cfg = RuntimeConfig(**runtime_config_data)
        assert cfg.error_policy == "raise"
        assert cfg.log_level == "DEBUG"
        assert cfg.rng_type == "pcg64"
        assert cfg.rng_seed == 42

    @pytest.mark.parametrize("field, value", [
        ("error_policy", "ignore"),
        ("log_level", "VERBOSE"),
        ("rng_type", "xoshiro"),
        ("rng_seed", -1),
        ("lambert_w_epsilon", 0.0),
        ("temporary_buffer_size", MINIMUM_TEMPORARY_BUFFER_SIZE - 1),
    ])
    def test_validation_invalid_values(self, field, value):
        with pytest.raises(ConfigurationError, match=field):
            RuntimeConfig(**{field: value})

    def test_to_dict(self, runtime_config_data):
        cfg = RuntimeConfig(**runtime_config_data)
        data = cfg.to_dict()
        assert data["rng_seed"] == 42
        assert data["rng_type"] == "pcg64"
        assert set(data) == set(runtime_config_data)

    def test_from_dict(self, runtime_config_data):
        cfg = RuntimeConfig.from_dict(runtime_config_data)
        assert cfg.temporary_buffer_size == 4096
        assert RuntimeConfig.from_dict(cfg.to_dict()) == cfg

    def test_from_dict_unknown_key(self):
        with pytest.raises(ConfigurationError) as info:
            RuntimeConfig.from_dict({"data_dir": "/tmp"})
        assert info.value.parameter == "data_dir"

    def test_update_rolls_back_on_failure(self):
        cfg = RuntimeConfig()
        with pytest.raises(ConfigurationError):
            cfg.update(error_policy="raise", temporary_buffer_size=16)
        assert cfg.error_policy == "log"
        assert cfg.temporary_buffer_size == 2048

    def test_update_unknown_parameter(self):
        cfg = RuntimeConfig()
        with pytest.raises(ConfigurationError):
            cfg.update(nside=1024)


class TestGlobalConfigFunctions:
    def test_get_set_config(self, runtime_config_data):
        cfg = RuntimeConfig(**runtime_config_data)
        set_config(cfg)
        assert get_config() is cfg

    def test_set_config_rejects_other_types(self):
        with pytest.raises(TypeError):
            set_config({"error_policy": "raise"})

    def test_reset_config(self, runtime_config_data):
        set_config(RuntimeConfig(**runtime_config_data))
        reset_config()
        assert get_config() == RuntimeConfig()

    def test_update_config(self):
        update_config(error_policy="flag", rng_seed=7)
        assert get_config().error_policy == "flag"
        assert get_config().rng_seed == 7

    @patch.dict(os.environ, {
        "MODEL_MATH_ERROR_POLICY": "raise",
        "MODEL_MATH_RNG_SEED": "123",
        "MODEL_MATH_TEMPORARY_BUFFER_SIZE": "8192",
        "MODEL_MATH_LAMBERT_W_EPSILON": "1e-10",
    })
    def test_load_config_from_env(self):
        cfg = load_config_from_env()
        assert cfg.error_policy == "raise"
        assert cfg.rng_seed == 123
        assert cfg.temporary_buffer_size == 8192
        assert cfg.lambert_w_epsilon == 1e-10

    @patch.dict(os.environ, {"MODEL_MATH_RNG_SEED": "not-a-number"})
    def test_load_config_from_env_bad_value(self):
        with pytest.raises(ConfigurationError) as info:
            load_config_from_env()
        assert info.value.parameter == "rng_seed"

    def test_configure_logging(self):
        update_config(log_level="ERROR")
        logger = configure_logging()
        assert logger.name == "model_math"
        assert logger.level == logging.ERROR
        assert configure_logging("debug").level == logging.DEBUG
