"""Schema provisioning and engine helpers."""
