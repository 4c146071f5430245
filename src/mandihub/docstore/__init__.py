"""
mandihub.docstore

Document persistence package (MongoDB via motor).

Responsibilities:
- Build and own the motor client.
- Provide the document store repositories and ObjectId conversion helpers.
"""

# Collection names shared by repositories and seeding.
CATEGORIES = "categories"
PRODUCTS = "products"
SELLERS = "sellers"
