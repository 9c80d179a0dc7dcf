"""Asset delivery strategy, in-memory cache and runtime manifest diffing."""