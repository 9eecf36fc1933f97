"""Kernel tuning ``sysctl.conf``; only the shared-memory ceilings vary."""

from __future__ import annotations

_NETWORK_AND_FILES = """\
# /etc/sysctl.conf - OS Kernel Optimization
# Network Performance
net.core.somaxconn = 65535
net.core.netdev_max_backlog = 65535
net.ipv4.tcp_max_syn_backlog = 65535
net.ipv4.tcp_fin_timeout = 15
net.ipv4.tcp_keepalive_time = 300
net.ipv4.tcp_keepalive_probes = 5
net.ipv4.tcp_keepalive_intvl = 15
net.ipv4.tcp_tw_reuse = 1
net.ipv4.ip_local_port_range = 10240 65535

# File Descriptors
fs.file-max = 2097152
fs.nr_open = 2097152
"""

_VM = """
# Swappiness (reduce swap usage)
vm.swappiness = 10
vm.dirty_ratio = 15
vm.dirty_background_ratio = 5

# Apply with: sudo sysctl -p"""


def render_sysctl_conf(shmmax: int, shmall: int) -> str:
    """Render ``/etc/sysctl.conf``.

    Args:
        shmmax: Largest shared-memory segment, bytes.
        shmall: Total shared memory, pages.
    """
    lines = [
        _NETWORK_AND_FILES,
        "# Shared Memory (for MySQL)",
        f"kernel.shmmax = {shmmax}",
        f"kernel.shmall = {shmall}",
        _VM,
    ]
    return "\n".join(lines)
