"""HTTP surface: root router and shared dependencies."""
