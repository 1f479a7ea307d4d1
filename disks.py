#!/usr/bin/env python3
"""Disk volume enumeration via psutil."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import psutil

logger = logging.getLogger(__name__)


@dataclass
class DiskInfo:
    """One mounted volume and its space usage"""

    name: str
    device: str
    mount_point: str
    file_system: str
    total: int
    used: int
    available: int

    @property
    def usage_percentage(self) -> float:
        return self.used / self.total * 100.0 if self.total else 0.0


def list_disks(all_partitions: bool = False) -> list[DiskInfo]:
    """List mounted volumes; mounts whose usage cannot be read are skipped"""
    disks = []
    for partition in psutil.disk_partitions(all=all_partitions):
        try:
            usage = psutil.disk_usage(partition.mountpoint)
        except OSError as e:
            logger.debug("Skipping mount %s: %s", partition.mountpoint, e)
            continue

        device = partition.device or partition.mountpoint
        disks.append(
            DiskInfo(
                name=os.path.basename(device.rstrip("/\\")) or device,
                device=device,
                mount_point=partition.mountpoint,
                file_system=partition.fstype,
                total=usage.total,
                used=usage.used,
                available=usage.free,
            )
        )
    return disks


def find_disk(name: str, disks: Optional[list[DiskInfo]] = None) -> Optional[DiskInfo]:
    """Find a disk by short name, device path or mount point"""
    if disks is None:
        disks = list_disks()
    for disk in disks:
        if name in (disk.name, disk.device, disk.mount_point):
            return disk
    return None
