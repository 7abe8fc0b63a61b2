"""Seeders and their tracking."""

from mcqbank.core.seeders.base import Seeder
from mcqbank.core.seeders.catalog import CatalogSeeder
from mcqbank.core.seeders.manager import SeederManager
from mcqbank.core.seeders.partition import PartitionSeeder, validate_candidates

__all__ = ["CatalogSeeder", "PartitionSeeder", "Seeder", "SeederManager", "validate_candidates"]
