import pytest

from trackmypark.api.main import create_app
from trackmypark.error_handler import ConfigurationError
from trackmypark.utils.config_loader import load_payments_config, load_settings, mask_key

FULL_ENV = {
    "RAZORPAY_KEY_ID": "rzp_live_0123456789",
    "RAZORPAY_SECRET": "secret",
    "STRIPE_SECRET_KEY": "sk_live_123",
    "STRIPE_WEBHOOK_SECRET": "whsec_123",
}


def test_default_config_file_defines_catalog():
    cfg = load_payments_config()
    assert cfg.currency == "INR"
    assert cfg.minimum_order_amount == 50
    assert cfg.products["1"].price == 1000
    assert len(cfg.products) == 5


def test_load_settings_reads_environment():
    env = {
        **FULL_ENV,
        "NODE_ENV": "development",
        "PORT": "4000",
        "FRONTEND_URL": "https://app.example.com/",
        "ALLOWED_ORIGINS": "https://a.example.com, https://b.example.com",
    }
    settings = load_settings(env)

    assert settings.is_development
    assert settings.port == 4000
    assert settings.integrations_mode == "real"
    assert "https://app.example.com" in settings.allowed_origins
    assert "https://b.example.com" in settings.allowed_origins
    assert len(settings.allowed_origins) == len(set(settings.allowed_origins))
    assert settings.missing_credentials() == []


def test_missing_credentials_fail_in_real_mode():
    settings = load_settings({"RAZORPAY_KEY_ID": "rzp_test_1"})
    assert settings.missing_credentials() == ["RAZORPAY_SECRET", "STRIPE_SECRET_KEY", "STRIPE_WEBHOOK_SECRET"]
    with pytest.raises(ConfigurationError):
        create_app(settings)


def test_mock_mode_still_requires_signing_secrets():
    settings = load_settings({"INTEGRATIONS_MODE": "mock"})
    assert settings.missing_credentials() == ["RAZORPAY_SECRET", "STRIPE_WEBHOOK_SECRET"]

    settings = load_settings({"INTEGRATIONS_MODE": "test", "RAZORPAY_SECRET": "s", "STRIPE_WEBHOOK_SECRET": "w"})
    assert settings.integrations_mode == "mock"
    settings.validate_credentials()


@pytest.mark.parametrize("env", [{"INTEGRATIONS_MODE": "sandbox"}, {"PORT": "not-a-port"}])
def test_invalid_values_raise_configuration_error(env):
    with pytest.raises(ConfigurationError):
        load_settings(env)


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(FULL_ENV, config_path=tmp_path / "missing.yml")


def test_mask_key():
    assert mask_key("rzp_test_ABCDEFGHIJ") == "rzp_test_A..."
    assert mask_key("") == "NOT SET"


def test_malformed_yaml_raises_configuration_error(tmp_path):
    path = tmp_path / "payments_config.yml"
    path.write_text("currency: INR\nproducts: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_payments_config(path)


def test_non_mapping_yaml_raises_configuration_error(tmp_path):
    path = tmp_path / "payments_config.yml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(FULL_ENV, config_path=path)
