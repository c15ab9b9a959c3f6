"""simcore package entry point"""

__all__ = [
	"Event", "EventAction", "EventDisposition", "DELETE", "Reschedule",
	"EventExecutor", "EventManager",
	"CallbackAction", "OneShot", "Periodic",
	"RunConfig", "configure_logging", "load_config",
]

try:
	# Prefer absolute imports when package is installed or run as a module
	from simcore.event import Event, EventAction, EventDisposition, DELETE, Reschedule
	from simcore.executor import EventExecutor
	from simcore.manager import EventManager
	from simcore.actions import CallbackAction, OneShot, Periodic
	from simcore.config import RunConfig, configure_logging, load_config
except ImportError:
	# Fallback to relative imports (useful when running files directly)
	from .event import Event, EventAction, EventDisposition, DELETE, Reschedule
	from .executor import EventExecutor
	from .manager import EventManager
	from .actions import CallbackAction, OneShot, Periodic
	from .config import RunConfig, configure_logging, load_config

__version__ = "0.1.0"
