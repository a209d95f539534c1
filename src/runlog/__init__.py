from runlog.base.config import LogConfig, set_default_config, set_default_logger
from runlog.core.subscriber import LogSubscriber

__all__ = ["LogConfig", "LogSubscriber", "set_default_config", "set_default_logger"]
