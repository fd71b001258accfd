"""
SSH known-hosts bootstrapping for cloning over SSH.

Before cloning many repositories at once, unknown SSH hosts are added to
~/.ssh/known_hosts with ssh-keyscan so that git does not stop on a
host-key prompt for every project.
"""

from __future__ import annotations

import re
import subprocess
from collections.abc import Iterable
from pathlib import Path

from ..core.di import get_logger
from ..core.interfaces.presenter import IPresenter

KEYSCAN_TIMEOUT = 30.0


def default_known_hosts() -> Path:
    return Path.home() / ".ssh" / "known_hosts"


def extract_ssh_host(url: str) -> str | None:
    """
    Extract the SSH host from a git URL.

    Examples:
        git@github.com:user/repo.git      -> github.com
        ssh://git@host.example:2222/repo  -> host.example
        https://github.com/user/repo.git  -> None

    Args:
        url: Git repository URL

    Returns:
        Host name, or None for non-SSH URLs
    """
    if url.startswith(("https://", "http://", "file://")):
        return None

    ssh_match = re.match(r"^ssh://[^@]+@([^/:]+)", url)
    if ssh_match:
        return ssh_match.group(1)

    scp_match = re.match(r"^[^@]+@([^:]+):", url)
    if scp_match:
        return scp_match.group(1)

    return None


def extract_unique_ssh_hosts(urls: Iterable[str]) -> list[str]:
    """SSH hosts of ``urls``, deduplicated, in first-seen order."""
    hosts: dict[str, None] = {}
    for url in urls:
        host = extract_ssh_host(url)
        if host:
            hosts.setdefault(host, None)
    return list(hosts)


def is_host_known(host: str, known_hosts: Path | None = None) -> bool:
    """
    Check whether ``host`` has a plain (unhashed) entry in known_hosts.

    Hashed entries are not recognized, so a hashed host is reported as
    unknown and rescanned.
    """
    path = known_hosts or default_known_hosts()
    try:
        content = path.read_text(encoding="utf-8")
    except OSError:
        return False

    escaped = re.escape(host)
    patterns = (
        re.compile(rf"^{escaped}[,\s]", re.MULTILINE),
        re.compile(rf"^\[{escaped}\]:\d+[,\s]", re.MULTILINE),
    )
    return any(p.search(content) for p in patterns)


def add_host_key(host: str, known_hosts: Path | None = None) -> bool:
    """
    Append the host keys of ``host`` to known_hosts using ssh-keyscan.

    Returns:
        True if keys were fetched and written, False otherwise
    """
    path = known_hosts or default_known_hosts()
    logger = get_logger()

    try:
        proc = subprocess.run(
            ["ssh-keyscan", "-H", host],
            capture_output=True,
            text=True,
            timeout=KEYSCAN_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("ssh-keyscan failed for %s: %s", host, e)
        return False

    if proc.returncode != 0 or not proc.stdout.strip():
        logger.warning("ssh-keyscan returned no keys for %s (exit %d)", host, proc.returncode)
        return False

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(proc.stdout if proc.stdout.endswith("\n") else proc.stdout + "\n")
    except OSError as e:
        logger.warning("Could not write %s: %s", path, e)
        return False

    return True


def ensure_ssh_hosts_known(
    urls: Iterable[str],
    presenter: IPresenter | None = None,
    known_hosts: Path | None = None,
) -> tuple[list[str], list[str]]:
    """
    Make sure every SSH host among ``urls`` is in known_hosts.

    Returns:
        (added, failed) host lists
    """
    added: list[str] = []
    failed: list[str] = []

    for host in extract_unique_ssh_hosts(urls):
        if is_host_known(host, known_hosts):
            continue

        if presenter is not None:
            presenter.info(f"Adding SSH host key for {host}...")
        if add_host_key(host, known_hosts):
            added.append(host)
            if presenter is not None:
                presenter.success(f"Added host key for {host}")
        else:
            failed.append(host)
            if presenter is not None:
                presenter.error(f"Failed to add host key for {host}")

    return added, failed
