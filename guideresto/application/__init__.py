"""Application layer - DTOs and the service facade."""
