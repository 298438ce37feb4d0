"""Bluetooth facade (SDK 5 and later)."""

import logging
from typing import Optional

from ..rpc import RpcParameter, RpcReceiver, rpc
from .context import BluetoothAdapter

logger = logging.getLogger("scriptlayer.facades.bluetooth")


class BluetoothFacade(RpcReceiver):
    """Bluetooth adapter state and remote device lookups."""

    @property
    def adapter(self) -> Optional[BluetoothAdapter]:
        adapter = getattr(self.context, "bluetooth_adapter", None)
        if adapter is None:
            logger.warning("No bluetooth adapter available")
        return adapter

    @rpc("Checks Bluetooth state.", returns="True if Bluetooth is enabled.")
    def checkBluetoothState(self) -> bool:
        adapter = self.adapter
        return bool(adapter.is_enabled()) if adapter is not None else False

    @rpc(
        "Toggle Bluetooth on and off.",
        returns="True if Bluetooth is enabled.",
        params=[RpcParameter("enabled", bool, optional=True)],
    )
    def toggleBluetoothState(self, enabled: Optional[bool] = None) -> bool:
        adapter = self.adapter
        if adapter is None:
            return False

        current = bool(adapter.is_enabled())
        if enabled is None:
            enabled = not current

        if enabled and not current:
            adapter.enable()
        elif not enabled and current:
            adapter.disable()
        return bool(enabled)

    @rpc(
        "Queries a remote device for it's name or null if it can't be resolved",
        params=[RpcParameter("address", str, "Bluetooth Address For Target Device")],
    )
    def bluetoothGetRemoteDeviceName(self, address: str) -> Optional[str]:
        adapter = self.adapter
        if adapter is None:
            return None
        return adapter.get_remote_device_name(address)
