"""ROI people and departments API.

This package exposes the service, repository and model modules used by
the FastAPI application. `roi_api.main.create_app` builds an app around
its own store handle; `roi_api.main.app` is the default instance.
"""
