"""User actions: upload an image, request a modification of the uploaded asset."""
