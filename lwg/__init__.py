"""
lwg - Linux Wine Games launcher configuration

Keeps a collection of game launch records and the application configuration
as human-readable YAML files under the user's configuration home, so a
launcher process can enumerate games, resolve their runner and start them.
"""

__version__ = "0.1.0"
__author__ = "SzymonJaroslawski"
