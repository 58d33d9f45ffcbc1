"""Services Layer — orchestrates core logic around IO (workspaces, persistence)."""
