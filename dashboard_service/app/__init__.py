"""HTTP application: factory, lifespan, middleware, error handlers."""
