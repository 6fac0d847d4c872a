"""
Demo records for the lead and unit screens.

Lead rows carry a nested `owner` mapping so dotted field paths
(`owner.name`) are exercised; unit rows mirror the master-data screens.
"""

_LEAD_ROWS = [
    # id, name, company, status, source, value, created_at, owner, tags
    (1, "Alicia Moreno", "Northwind Traders", "New", "Website", 12500.0, "2024-01-04T09:15:00Z", "Priya Shah", ["laptops"]),
    (2, "Ben Okafor", "Contoso Ltd", "Won", "Referral", 48200.0, "2024-01-11T14:02:00Z", "Marcus Lee", ["servers", "storage"]),
    (3, "Chen Wei", "Fabrikam, Inc.", "Qualified", "Trade Show", 9300.0, "2024-01-19T10:45:00Z", "Priya Shah", ["monitors"]),
    (4, "Dana Fischer", "Adventure Works", "Lost", "Cold Call", 2100.0, "2024-01-23T16:30:00Z", "Sofia Ruiz", []),
    (5, "Emeka Nwosu", "Tailspin Toys", "New", "Website", 15800.0, "2024-02-01T08:05:00Z", "Marcus Lee", ["laptops", "docks"]),
    (6, "Farah Haddad", "Wide World Importers", "Contacted", "Email Campaign", 27400.0, "2024-02-06T11:20:00Z", "Sofia Ruiz", ["networking"]),
    (7, "Gustavo Lima", "Litware Inc", "Won", "Referral", 61000.0, "2024-02-14T13:10:00Z", "Priya Shah", ["servers"]),
    (8, "Hana Sato", "Proseware", "Qualified", "Website", 7800.0, "2024-02-20T15:55:00Z", None, ["printers"]),
    (9, "Ivan Petrov", "Coho Winery", "Contacted", "Trade Show", 4300.0, "2024-03-02T09:40:00Z", "Marcus Lee", []),
    (10, "Julia \"Jules\" Brandt", "Lucerne Publishing", "New", "Email Campaign", 11900.0, "2024-03-09T10:00:00Z", "Sofia Ruiz", ["tablets"]),
    (11, "Kwame Mensah", "Blue Yonder Airlines", "Won", "Partner", 83500.0, "2024-03-15T17:25:00Z", "Priya Shah", ["servers", "networking"]),
    (12, "Lena Johansson", "Margie's Travel", "Lost", "Website", 1500.0, "2024-03-21T12:35:00Z", "Marcus Lee", ["laptops"]),
    (13, "Mateo Rossi", "Trey Research", "Qualified", "Partner", 22600.0, "2024-04-03T08:50:00Z", "Sofia Ruiz", ["storage"]),
    (14, "Nadia Karim", "Alpine Ski House", "New", "Cold Call", 5200.0, "2024-04-10T14:45:00Z", None, []),
    (15, "Oliver Grant", "School of Fine Art", "Contacted", "Website", 3900.0, "2024-04-18T16:05:00Z", "Priya Shah", ["tablets", "printers"]),
    (16, "Paula Mendes", "Woodgrove Bank", "Won", "Referral", 124000.0, "2024-04-25T09:30:00Z", "Marcus Lee", ["servers", "security"]),
    (17, "Quinn O'Brien", "Humongous Insurance", "Qualified", "Email Campaign", 36700.0, "2024-05-02T11:15:00Z", "Sofia Ruiz", ["laptops"]),
    (18, "Rahul Verma", "Graphic Design Institute", "New", "Trade Show", 6400.0, "2024-05-08T13:40:00Z", "Priya Shah", ["monitors"]),
    (19, "Sara Lindqvist", "City Power & Light", "Contacted", "Partner", 45100.0, "2024-05-16T10:20:00Z", "Marcus Lee", ["networking"]),
    (20, "Tomasz Nowak", "Fourth Coffee", "Lost", "Website", 2800.0, None, "Sofia Ruiz", []),
    (21, "Uma Raman", "Relecloud", "New", "Referral", 19900.0, "2024-06-01T15:00:00Z", "Priya Shah", ["storage", "servers"]),
    (22, "Victor Hugo Silva", "VanArsdel, Ltd.", "Qualified", "Website", 8800.0, "2024-06-07T09:05:00Z", None, ["docks"]),
    (23, "Wen Zhao", "Wingtip Toys", "Won", "Email Campaign", 30500.0, "2024-06-13T12:50:00Z", "Marcus Lee", ["laptops", "monitors"]),
    (24, "Yusuf Demir", "Bellows College", "Contacted", "Cold Call", 4700.0, "2024-06-20T17:45:00Z", "Sofia Ruiz", ["tablets"]),
]

DEMO_LEADS = [
    {
        "id": lead_id,
        "name": name,
        "company": company,
        "status": status,
        "source": source,
        "value": value,
        "created_at": created_at,
        "owner": {"name": owner} if owner else None,
        "tags": tags,
        "notes": "",
    }
    for lead_id, name, company, status, source, value, created_at, owner, tags in _LEAD_ROWS
]

DEMO_LEADS[2]["notes"] = "Asked for a quote on 40 units,\nfollow up after budget review."
DEMO_LEADS[9]["notes"] = 'Prefers to be called "Jules".'

_UNIT_ROWS = [
    # id, name, status, updated_by_name, updated_by_role, updated_at
    (1, "Piece", "Active", "Priya Shah", "Admin", "2024-02-11T10:00:00Z"),
    (2, "Box", "Active", "Marcus Lee", "Editor", "2024-02-12T09:30:00Z"),
    (3, "Carton", "Active", "Priya Shah", "Admin", "2024-03-01T14:20:00Z"),
    (4, "Pallet", "Inactive", "Sofia Ruiz", "Editor", "2024-03-05T16:45:00Z"),
    (5, "Kilogram", "Active", "Marcus Lee", "Editor", "2024-03-18T08:10:00Z"),
    (6, "Gram", "Active", None, None, None),
    (7, "Litre", "Active", "Sofia Ruiz", "Editor", "2024-04-02T11:00:00Z"),
    (8, "Metre", "Inactive", "Priya Shah", "Admin", "2024-04-09T13:25:00Z"),
    (9, "Dozen", "Active", "Marcus Lee", "Editor", "2024-04-22T15:40:00Z"),
    (10, "Set", "Active", "Sofia Ruiz", "Editor", "2024-05-06T10:15:00Z"),
    (11, "Roll", "Inactive", "Priya Shah", "Admin", "2024-05-20T09:50:00Z"),
    (12, "Bundle", "Active", "Marcus Lee", "Editor", "2024-06-03T12:05:00Z"),
]

DEMO_UNITS = [
    {
        "id": unit_id,
        "name": name,
        "status": status,
        "updated_by_name": updated_by,
        "updated_by_role": role,
        "updated_at": updated_at,
    }
    for unit_id, name, status, updated_by, role, updated_at in _UNIT_ROWS
]
