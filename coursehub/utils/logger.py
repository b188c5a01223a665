"""
Colored console logging shared by the application and the run script
"""
import os
import logging
import colorlog
import functools
import inspect
import time

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}


class CustomLogger:
    """
    Custom logger class to handle detailed function logging with terminal output only
    """
    def __init__(self, name='coursehub.calls'):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

        # Avoid stacking handlers when the module is re-imported by the reloader
        if not self.logger.handlers:
            console_handler = colorlog.StreamHandler()
            console_handler.setLevel(logging.DEBUG)

            console_formatter = colorlog.ColoredFormatter(
                "%(log_color)s[%(asctime)s] %(levelname)-8s%(reset)s "
                "%(blue)s%(name)s %(bold_white)s%(funcName)s:%(lineno)d%(reset)s - "
                "%(message_log_color)s%(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                log_colors=LOG_COLORS,
                secondary_log_colors={
                    'message': {
                        'DEBUG': 'cyan',
                        'INFO': 'white',
                        'WARNING': 'yellow',
                        'ERROR': 'red',
                        'CRITICAL': 'red,bg_white',
                    }
                }
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

    def log_function_call(self, func):
        """Decorator to log function calls with timing and parameters"""
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            func_name = func.__name__
            file_name = inspect.getfile(func)

            self.logger.info(f"→ Entering {func_name} [{os.path.basename(file_name)}]")

            if args or kwargs:
                params = []
                if args:
                    params.append(f"args: {args}")
                if kwargs:
                    params.append(f"kwargs: {kwargs}")
                self.logger.debug(f"Parameters: {', '.join(params)}")

            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                execution_time = (time.time() - start_time) * 1000
                self.logger.info(f"← Completed {func_name} in {execution_time:.2f}ms")
                return result

            except Exception as e:
                execution_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"✕ Error in {func_name} after {execution_time:.2f}ms: "
                    f"{str(e)}", exc_info=True
                )
                raise

        return wrapper


custom_logger = CustomLogger()


def setup_logging(level=logging.INFO):
    """Configure the root logger with the colored console format"""
    logger = logging.getLogger()
    logger.setLevel(level)
    if not any(isinstance(h.formatter, colorlog.ColoredFormatter) for h in logger.handlers):
        handler = colorlog.StreamHandler()
        handler.setFormatter(colorlog.ColoredFormatter(
            "%(log_color)s%(asctime)s - %(name)s - %(levelname)s - %(message)s%(reset)s",
            log_colors=LOG_COLORS,
        ))
        logger.addHandler(handler)
