"""Per-install device identifier sent as a trace header."""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from roto.logging_config import get_logger
from roto.models import Device
from roto.storage import StorageError

logger = get_logger(__name__)


class DeviceIdentity:
    """Generates the device id once, persists it, and reuses it afterwards."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory
        self._device_id: str | None = None

    def get(self) -> str:
        """
        Return the device id, creating and storing it on first use.

        Raises:
            StorageError: The id could not be read or stored.
        """
        if self._device_id is None:
            self._device_id = self._load_or_create()
        return self._device_id

    def _load_or_create(self) -> str:
        try:
            with self.session_factory.begin() as session:
                device = session.scalars(select(Device).order_by(Device.id)).first()
                if device is None:
                    device = Device()
                    session.add(device)
                    session.flush()
                    logger.info(f"Generated device id {device.device_id}")
                return device.device_id
        except SQLAlchemyError as e:
            logger.error(f"Failed to load device id: {e}")
            raise StorageError(f"Failed to load device id: {e}", operation="device_id") from e
