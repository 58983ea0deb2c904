from .loader import GostubConfig, load_config_from_path, default_module_root

__all__ = ["GostubConfig", "load_config_from_path", "default_module_root"]
