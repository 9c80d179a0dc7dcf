"""Shared data model: assets, manifests, project configuration and loader options."""