import logging
from pathlib import Path
from string import Template

__all__ = [
    'configure_logger'
]

class StripBasenameFilter:
    """
    Shortens `<basename>.helper` to `helper` so records and log files are
    named after the module that emitted them.
    """

    def __init__(self, basename):
        self.prefix = basename + '.'

    def filter(self, record):
        if record.name.startswith(self.prefix):
            record.name = record.name[len(self.prefix):]

        return True

class PerLoggerFileHandler(logging.Handler):
    terminator = '\n'

    def __init__(self, filename_format):
        super().__init__()

        self.filename_format = filename_format
        self._template = Template(filename_format)
        self._files = dict()

    def close(self):
        self.acquire()
        try:
            for file in self._files.values():
                file.close()
            self._files.clear()

        finally:
            self.release()

        super().close()

    def emit(self, record):
        msg = self.format(record)

        self.acquire()
        try:
            file = self._files.get(record.name)
            if file is None:
                path = Path(self._template.substitute(name=record.name))
                path.parent.mkdir(parents=True, exist_ok=True)
                file = path.open('a')
                self._files[record.name] = file

            file.write(msg + self.terminator)
            file.flush()

        finally:
            self.release()

# handlers installed by configure_logger, per basename
_handlers: dict[str, dict[str, logging.Handler]] = {}

def configure_logger(basename, filename_format=None, level=logging.INFO):
    """
    Sets up console logging (at `level`) and, when `filename_format` is
    given, one log file per logger (`$name` is replaced by the logger name)
    for the `basename` logger tree.

    Calling it again for the same basename updates the console level and
    replaces the file handler if the format changed.
    """

    logger = logging.getLogger(basename)
    logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter('[%(asctime)s] %(name)s | %(levelname)s | %(message)s', '%Y-%m-%d %H:%M:%S')
    handlers = _handlers.setdefault(basename, {})

    console = handlers.get('console')
    if console is None:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        console.addFilter(StripBasenameFilter(basename))
        logger.addHandler(console)
        handlers['console'] = console

    console.setLevel(level)

    file = handlers.get('file')
    if file is not None and file.filename_format != filename_format:
        logger.removeHandler(file)
        file.close()
        del handlers['file']
        file = None

    if file is None and filename_format is not None:
        file = PerLoggerFileHandler(filename_format)
        file.setLevel(logging.DEBUG)
        file.setFormatter(formatter)
        file.addFilter(StripBasenameFilter(basename))
        logger.addHandler(file)
        handlers['file'] = file

    return logger
