"""Application defaults — lives in L4, not domain."""

from __future__ import annotations

import copy

from converse_client.l1_entities.config import AppConfig
from converse_client.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

APP_CONFIG_DEFAULTS: dict = {
    'sidecar': {
        'grpc_address': '127.0.0.1:50001',
        'api_token': None,
        'timeout': 60.0,
    },
    'conversation': {
        'component': 'echo',
    },
}


def build_app_config(raw: dict) -> AppConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    return AppConfig.model_validate(merged)
