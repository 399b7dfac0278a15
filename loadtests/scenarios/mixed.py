"""Mixed storefront workload scenario.

Combines catalogue browsing, admin edits and checkout journeys with
weights that model realistic e-commerce traffic. This is the recommended
scenario for load baseline testing.
"""

from locust import HttpUser, between

from loadtests.scenarios.catalogue import BrowseCatalogueJourney, ProductAdminJourney
from loadtests.scenarios.ordering import CartToCheckoutJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload.

    - Browsing (65%): anonymous reads of the catalogue
    - Checkout (30%): cart to order conversion
    - Admin (5%): product create/update/delete
    """

    wait_time = between(1, 5)
    tasks = {
        BrowseCatalogueJourney: 65,
        CartToCheckoutJourney: 30,
        ProductAdminJourney: 5,
    }
