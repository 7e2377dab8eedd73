from states_shuffler.config.settings import AppConfig, MutationConfig, ScanConfig

__all__ = ["AppConfig", "MutationConfig", "ScanConfig"]
