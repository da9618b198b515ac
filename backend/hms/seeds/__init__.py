# Seed data
from hms.seeds.main_seeder import MainSeeder

__all__ = ['MainSeeder']
