"""HTTP layer: dependencies, response rendering and versioned routers."""
