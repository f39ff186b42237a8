from .config import SessionConfig, load_config, session_config_from, validate_config

__all__ = ["SessionConfig", "load_config", "session_config_from", "validate_config"]
