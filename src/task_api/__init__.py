"""Task API: a small REST CRUD service for tasks."""
