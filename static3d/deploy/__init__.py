"""Collect, hash and describe assets for deployment, and diff manifests."""