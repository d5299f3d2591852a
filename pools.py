"""
Pools we track: SF Recreation & Parks pools plus a few nearby pools.

A pool with schedule_url None has no schedule PDF configured. It only shows a
schedule if it has a manual override (see manual_schedules.json).
"""

SF_REC_PARK = "https://sfrecpark.org"

POOLS = [
    {
        "id": "balboa",
        "name": "Balboa Pool",
        "city": "San Francisco",
        "address": "San Jose & Havelock, San Francisco, CA 94112",
        "schedule_url": f"{SF_REC_PARK}/DocumentCenter/View/26439",
        "details_url": f"{SF_REC_PARK}/Facilities/Facility/Details/Balboa-Pool-212",
    },
    {
        "id": "coffman",
        "name": "Coffman Pool",
        "city": "San Francisco",
        "address": "Visitacion & Hahn, San Francisco, CA 94134",
        "schedule_url": f"{SF_REC_PARK}/DocumentCenter/View/26440",
        "details_url": f"{SF_REC_PARK}/Facilities/Facility/Details/Coffman-Pool-213",
    },
    {
        "id": "garfield",
        "name": "Garfield Pool",
        "city": "San Francisco",
        "address": "26th & Harrison, San Francisco, CA 94110",
        "schedule_url": f"{SF_REC_PARK}/DocumentCenter/View/26441",
        "details_url": f"{SF_REC_PARK}/Facilities/Facility/Details/Garfield-Pool-214",
    },
    {
        "id": "hamilton",
        "name": "Hamilton Pool",
        "city": "San Francisco",
        "address": "Geary & Steiner, San Francisco, CA 94115",
        "schedule_url": f"{SF_REC_PARK}/DocumentCenter/View/26442",
        "details_url": f"{SF_REC_PARK}/Facilities/Facility/Details/Hamilton-Pool-215",
    },
    {
        "id": "mlk",
        "name": "Martin Luther King Jr. Pool",
        "city": "San Francisco",
        "address": "Third Street & Carroll, San Francisco, CA 94124",
        "schedule_url": f"{SF_REC_PARK}/DocumentCenter/View/26444",
        "details_url": f"{SF_REC_PARK}/Facilities/Facility/Details/Martin-Luther-King-Jr-Pool-216",
    },
    {
        "id": "mission",
        "name": "Mission Pool",
        "city": "San Francisco",
        "address": "19th & Linda, San Francisco, CA 94110",
        "schedule_url": f"{SF_REC_PARK}/DocumentCenter/View/27505",
        "details_url": f"{SF_REC_PARK}/Facilities/Facility/Details/Mission-Community-Pool-217",
    },
    {
        "id": "north-beach",
        "name": "North Beach Pool",
        "city": "San Francisco",
        "address": "Lombard & Mason, San Francisco, CA 94133",
        # under renovation, no schedule posted
        "schedule_url": None,
        "details_url": f"{SF_REC_PARK}/Facilities/Facility/Details/North-Beach-Pool-218",
    },
    {
        "id": "rossi",
        "name": "Rossi Pool",
        "city": "San Francisco",
        "address": "Arguello & Anza, San Francisco, CA 94118",
        "schedule_url": f"{SF_REC_PARK}/DocumentCenter/View/26455",
        "details_url": f"{SF_REC_PARK}/Facilities/Facility/Details/Rossi-Pool-219",
    },
    {
        "id": "sava",
        "name": "Sava Pool",
        "city": "San Francisco",
        "address": "19th Avenue & Wawona, San Francisco, CA 94116",
        "schedule_url": f"{SF_REC_PARK}/DocumentCenter/View/27654",
        "details_url": f"{SF_REC_PARK}/Facilities/Facility/Details/Sava-Pool-220",
    },
    {
        "id": "brisbane",
        "name": "Brisbane Aquatic Center",
        "city": "Brisbane",
        "address": "50 Park Place, Brisbane, CA 94005",
        "schedule_url": None,
        "details_url": "https://www.brisbaneca.org/parksrec/page/community-pool",
    },
    {
        "id": "burlingame",
        "name": "Burlingame Recreation Center",
        "city": "Burlingame",
        "address": "850 Burlingame Ave, Burlingame, CA 94010",
        "schedule_url": None,
        "details_url": "https://www.burlingameaquatics.com/programs/community/lap-swimming",
    },
]


def find_pool(pool_id, pools=POOLS):
    """Return the pool dict with this id, or None."""
    for pool in pools:
        if pool["id"] == pool_id:
            return pool
    return None
