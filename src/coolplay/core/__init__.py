"""coolplay core: marker engine, metadata stores, configuration and I/O."""
