from pharmacy_pos.models.storage_slot import StorageSlot

__all__ = ["StorageSlot"]
