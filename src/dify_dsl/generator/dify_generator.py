""" Serialize an App back to Dify DSL YAML. """
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Type, Union

import yaml

from ..core.app import App

logger = logging.getLogger(__name__)

# Unicode line breaks other than \n. Written raw they reload as a space or a newline.
UNICODE_BREAKS = ("\x85", "\u2028", "\u2029")


@dataclass(frozen=True)
class DumpOptions:
    """
    Emitter settings. Key order always follows ``App.to_tree()``.
    """
    multiline_literal: bool = True
    null_as_tilde: bool = False
    width: int = 120
    allow_unicode: bool = True
    sort_keys: bool = False


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if any(ch in data for ch in UNICODE_BREAKS):
        # Double quotes are the only style in which the emitter escapes them.
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style='"')
    return dumper.represent_str(data)


def _represent_literal_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    # The emitter falls back to a quoted style when a block scalar cannot hold the text.
    if "\n" in data and not any(ch in data for ch in UNICODE_BREAKS):
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return _represent_str(dumper, data)


def _represent_tilde_none(dumper: yaml.SafeDumper, data: None) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:null", "~")


def _dumper_for(options: DumpOptions) -> Type[yaml.SafeDumper]:
    class DifyDumper(yaml.SafeDumper):
        pass

    DifyDumper.add_representer(str, _represent_literal_str if options.multiline_literal else _represent_str)
    if options.null_as_tilde:
        DifyDumper.add_representer(type(None), _represent_tilde_none)
    return DifyDumper


class DifyGenerator:
    def __init__(self, indent: int = 2, options: Optional[DumpOptions] = None):
        self.indent = indent
        self.options = options or DumpOptions()

    def set_indent_size(self, size: int) -> None:
        self.indent = size

    def set_options(self, options: DumpOptions) -> None:
        self.options = options

    def generate(self, app: App) -> str:
        """
        Emit ``app`` with the generator's current options.
        """
        return self._dump(app, self.options)

    def generate_pretty(self, app: App) -> str:
        """
        Emit with literal blocks for multi-line text and ``~`` for nulls.
        """
        return self._dump(app, replace(self.options, multiline_literal=True, null_as_tilde=True))

    def generate_to_file(self, app: App, path: Union[str, Path], pretty: bool = False) -> Path:
        """
        Write the YAML for ``app`` to ``path``, creating parent directories.
        I/O failures propagate as OSError.
        """
        text = self.generate_pretty(app) if pretty else self.generate(app)
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.debug("Wrote %d bytes to %s", len(text), path)
        return path

    def _dump(self, app: App, options: DumpOptions) -> str:
        return yaml.dump(
            app.to_tree(),
            Dumper=_dumper_for(options),
            indent=self.indent,
            width=options.width,
            allow_unicode=options.allow_unicode,
            sort_keys=options.sort_keys,
            default_flow_style=False,
        )


def dump_app(app: App, pretty: bool = False) -> str:
    """ Emit ``app`` with default settings. """
    generator = DifyGenerator()
    return generator.generate_pretty(app) if pretty else generator.generate(app)
