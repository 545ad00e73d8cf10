"""Service layer: command-line front end for the Venice adapter."""
