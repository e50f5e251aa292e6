"""
Source Code Root Module

This module serves as the root for the source code of the application.

Layer Structure:
- Domain: Core entities, errors and services (feature scaling, validation)
- Application: Use cases, DTOs and the stateful ROI session
- Presentation: Controllers and routes for the REST API
- Shared: Cross-cutting concerns and shared utilities
- Main: Composition root, application entry point and configuration
"""
