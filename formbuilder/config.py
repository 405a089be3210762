import os
from pathlib import Path

import logging

from .dynamic import Dynamic

__all__ = [
    'FormBuilderConfig',
    'load_config'
]

class FormBuilderConfig:
    MODULE_FILE = 'formbuilder.conf'
    JSON_FILE = 'formbuilder.json'

    def __init__(self, home):
        self.home: Path = Path(home)
        self.log: logging.Logger = logging.getLogger('formbuilder.config')

        module_file = self.home / self.MODULE_FILE
        json_file = self.home / self.JSON_FILE

        if module_file.exists():
            self.settings: Dynamic = Dynamic.from_module(str(module_file))
            self.path: Path = module_file

        elif json_file.exists():
            self.settings = Dynamic.from_file(json_file)
            self.path = json_file

        else:
            raise FileNotFoundError(f'no configuration file in {self.home}')

        self.log.debug('loaded configuration from %s', self.path)

    @property
    def custom_fields(self) -> dict[str, str]:
        return dict(self.settings.get('custom_fields') or {})

def load_config() -> FormBuilderConfig:
    paths = []
    env_path = os.environ.get('FORMBUILDER_HOME', None)

    if env_path is not None:
        paths.append(Path(env_path).expanduser().resolve())

    xdg_config_home = os.environ.get('XDG_CONFIG_HOME', None)
    if xdg_config_home is not None:
        user_config_path = Path(xdg_config_home)
    else:
        user_config_path = Path('~/.config').expanduser().resolve()

    paths.extend([
        user_config_path / 'formbuilder',
        Path('/etc/formbuilder').resolve(),
    ])

    for path in paths:
        try:
            return FormBuilderConfig(path)
        except FileNotFoundError:
            pass

    raise FileNotFoundError('no configuration file found')
