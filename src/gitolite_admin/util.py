from collections import abc
import configparser
import contextlib
import os
import secrets
import typing as t

SECTION = "gitolite-admin"


@contextlib.contextmanager
def safe_open_write(path: str) -> abc.Iterator[t.IO]:
    tmp = f"{path}.{secrets.token_hex(16)}.tmp"
    with open(tmp, "w") as fp:
        yield fp
        fp.flush()
        os.fsync(fp.fileno())
    os.rename(tmp, path)


def write_file(path: str, contents: str) -> None:
    with safe_open_write(path) as fp:
        fp.write(contents)


def read_file(path: str) -> str:
    with open(path) as f:
        return f.read()


def get(cfg: configparser.ConfigParser, section: str, key: str, *, default=None):  # noqa: ANN001, ANN201
    try:
        return cfg.get(section, key)
    except (configparser.NoSectionError, configparser.NoOptionError):
        return default


def get_admin_dir(config: configparser.ConfigParser) -> str:
    path = get(config, SECTION, "path", default="gitolite-admin")
    return os.path.join(os.path.expanduser("~"), os.path.expanduser(path))  # type: ignore


def get_conf_path(config: configparser.ConfigParser) -> str:
    conffile = get(config, SECTION, "conffile", default=os.path.join("conf", "gitolite.conf"))
    return os.path.join(get_admin_dir(config), conffile)  # type: ignore
