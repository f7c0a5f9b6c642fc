"""
Academy Courses Package

Course catalogue models. Course CRUD and search are handled elsewhere; the
payment core only reads courses to price purchases and grant access.
"""
