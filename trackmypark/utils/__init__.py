"""
Utility modules for the payments API
"""
from .config_loader import PaymentsSettings, load_payments_config, load_settings, mask_key

__all__ = [
    'PaymentsSettings',
    'load_payments_config',
    'load_settings',
    'mask_key',
]
