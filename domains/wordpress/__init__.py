"""
WordPress domain module.

Site classification, multisite rewrites and the uploads proxy for locally
hosted WordPress projects.
"""
from .classifier import SiteContext, classify
from .driver import LocalWordPressDriver
from .rewrite import RewriteResult, rewrite
