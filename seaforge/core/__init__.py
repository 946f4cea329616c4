"""Core build pipeline: hashing, staging, assembly, launch, orchestration."""
