"""Methods for retrieving the program configuration."""

import contextlib
import functools
import importlib.machinery
import importlib.util
import logging
import os
import sys
from types import ModuleType
from typing import Any

from gridresults import configdef


# Cache configuration module here
config_module = None

CONFIG_FILE = 'gridresultsrc'

# Config variables that override all others
overrides = {}


def xdg_dir(var: str, *home_subdirs: str) -> str:
    """Get an XDG base directory, falling back to the usual location under $HOME.

    See https://wiki.archlinux.org/title/XDG_Base_Directory for the standard vars.
    """
    if var in os.environ:
        return os.environ[var]
    if 'HOME' in os.environ:
        return os.path.join(os.environ['HOME'], *home_subdirs)
    return '.'


def config_dir() -> str:
    """Get the directory in which to store the configuration files."""
    return xdg_dir('XDG_CONFIG_HOME', '.config')


def cache_dir() -> str:
    """Get the directory in which to store cache files."""
    return xdg_dir('XDG_CACHE_HOME', '.cache')


def environ() -> dict[str, str]:
    """Return a dict with the config environment.

    This contains the process environment variables, plus the default config variables,
    plus the local config variables, plus the overrides given on the command line.
    The config variables all take precedence over the environment variables, so that an
    oddly-named environment variables doesn't override a configured value.
    """
    env = {**os.environ, **configdef.__dict__, **config().__dict__, **overrides}
    env.setdefault('XDG_CONFIG_HOME', config_dir())
    env.setdefault('XDG_CACHE_HOME', cache_dir())
    return env


def expandstr(var: str) -> str:
    """Expand a string with environment variables."""
    return var.format(**environ())


@functools.lru_cache(maxsize=None)
def expand(var: str) -> str:
    """Get a config variable and expand it with environment variables."""
    return expandstr(get(var))


@functools.lru_cache(maxsize=None)
def get(var: str) -> Any:
    """Get a raw config variable."""
    return environ()[var]


@contextlib.contextmanager
def override_var(obj, name: str, value: Any):
    """Change an object variable within a with context.

    The original value of the attribute is restored on context exit.
    """
    saved_value = getattr(obj, name)
    setattr(obj, name, value)
    try:
        yield saved_value
    finally:
        setattr(obj, name, saved_value)


def config() -> ModuleType:
    """Return the configuration file as a module."""
    global config_module
    if config_module:
        return config_module

    configfn = os.path.join(config_dir(), CONFIG_FILE)
    if (os.access(configfn, os.R_OK)
        and (spec := importlib.util.spec_from_loader(
             CONFIG_FILE,
             importlib.machinery.SourceFileLoader(CONFIG_FILE, configfn)))):
        config_module = importlib.util.module_from_spec(spec)

        # Don't write the imported config file bytecode file to eliminate caching problems
        with override_var(sys, 'dont_write_bytecode', True):
            spec.loader.exec_module(config_module)
    else:
        logging.debug('Configuration file %s not found', configfn)
        config_module = ModuleType('empty')

    return config_module  # noqa: R504


def add_override(name: str, value: Any):
    """Add a config variable that overrides all others.

    Cached lookups are dropped so the new value is seen immediately.
    """
    overrides[name] = value
    get.cache_clear()
    expand.cache_clear()
