"""HTTP API wiring for the roomshare backend."""
