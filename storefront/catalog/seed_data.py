"""Bundled catalog dataset used to reset the catalog to a known state."""

from storefront.catalog.schemas import ProductCreate
from storefront.domain.value_objects import Gender, Size

SEED_PRODUCTS: list[ProductCreate] = [
    ProductCreate(
        title="Men's Chill Crew Neck Sweatshirt",
        description="Relaxed crew neck sweatshirt in a heavyweight cotton blend.",
        price=75,
        stock=7,
        sizes=[Size.XS, Size.S, Size.M, Size.L, Size.XL, Size.XXL],
        gender=Gender.MEN,
        tags=["sweatshirt"],
        images=["1740176-00-A_0_2000.jpg", "1740176-00-A_1.jpg"],
    ),
    ProductCreate(
        title="Men's Quilted Shirt Jacket",
        description="Quilted shirt jacket with a water-repellent shell.",
        price=200,
        stock=5,
        sizes=[Size.XS, Size.S, Size.M, Size.XL, Size.XXL],
        gender=Gender.MEN,
        tags=["jacket"],
        images=["1740507-00-A_0_2000.jpg", "1740507-00-A_1.jpg"],
    ),
    ProductCreate(
        title="Men's Raven Lightweight Zip Up Bomber Jacket",
        description="Lightweight bomber with a ribbed collar and hem.",
        price=130,
        stock=10,
        sizes=[Size.S, Size.M, Size.L, Size.XL, Size.XXL],
        gender=Gender.MEN,
        tags=["shirt"],
        images=["1740250-00-A_0_2000.jpg", "1740250-00-A_1.jpg"],
    ),
    ProductCreate(
        title="Men's Turbine Long Sleeve Tee",
        description="Long sleeve tee in soft combed cotton.",
        price=45,
        stock=50,
        sizes=[Size.XS, Size.S, Size.M, Size.L],
        gender=Gender.MEN,
        tags=["shirt"],
        images=["1740280-00-A_0_2000.jpg", "1740280-00-A_1.jpg"],
    ),
    ProductCreate(
        title="Women's Cropped Puffer Jacket",
        description="Cropped puffer with a high collar and snap front.",
        price=225,
        stock=85,
        sizes=[Size.XS, Size.S, Size.M],
        gender=Gender.WOMEN,
        tags=["hoodie"],
        images=["1740535-00-A_0_2000.jpg", "1740535-00-A_1.jpg"],
    ),
    ProductCreate(
        title="Women's Raven Slouchy Crew Sweatshirt",
        description="Slouchy crew sweatshirt with dropped shoulders.",
        price=110,
        stock=9,
        sizes=[Size.XS, Size.S, Size.M, Size.L, Size.XL, Size.XXL],
        gender=Gender.WOMEN,
        tags=["hoodie"],
        images=["1740280-00-A_0_2000.jpg"],
    ),
    ProductCreate(
        title="Women's Scoop Neck Tee",
        description="Fitted scoop neck tee in a cotton modal blend.",
        price=35,
        stock=30,
        sizes=[Size.XS, Size.S, Size.M, Size.L, Size.XL],
        gender=Gender.WOMEN,
        tags=["shirt"],
        images=["1741441-00-A_0_2000.jpg", "1741441-00-A_1.jpg"],
    ),
    ProductCreate(
        title="Kids Cybertruck Long Sleeve Tee",
        description="Long sleeve tee with a printed graphic on the chest.",
        price=30,
        stock=10,
        sizes=[Size.XS, Size.S, Size.M],
        gender=Gender.KID,
        tags=["shirt"],
        images=["1742694-00-A_1_2000.jpg", "1742694-00-A_3.jpg"],
    ),
    ProductCreate(
        title="Kids Racing Stripe Tee",
        description="Short sleeve tee with contrast racing stripes.",
        price=30,
        stock=10,
        sizes=[Size.XS, Size.S, Size.M],
        gender=Gender.KID,
        tags=["shirt"],
        images=["1742697-00-A_0_2000.jpg"],
    ),
    ProductCreate(
        title="Kids Scribble Hoodie",
        description="Pullover hoodie with a kangaroo pocket.",
        price=65,
        stock=15,
        sizes=[Size.XS, Size.S],
        gender=Gender.KID,
        tags=["hoodie"],
        images=["1742702-00-A_0_2000.jpg", "1742702-00-A_1.jpg"],
    ),
    ProductCreate(
        title="Chill Pullover Hoodie",
        description="Premium pullover hoodie in a brushed fleece.",
        price=130,
        stock=10,
        sizes=[Size.XS, Size.S, Size.M, Size.L, Size.XL, Size.XXL],
        gender=Gender.UNISEX,
        tags=["hoodie"],
        images=["1740051-00-A_0_2000.jpg", "1740051-00-A_1.jpg"],
    ),
    ProductCreate(
        title="Relaxed T Logo Hat",
        description="Six-panel cap with an embroidered logo and adjustable strap.",
        price=30,
        stock=100,
        sizes=[Size.M],
        gender=Gender.UNISEX,
        tags=["hats"],
        images=["1657932-00-A_0_2000.jpg", "1657932-00-A_1.jpg"],
    ),
]
