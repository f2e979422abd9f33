"""Application layer: session context, DTOs and orchestration services."""
