from partsdesk.models.category import Category
from partsdesk.models.product import Product
from partsdesk.models.enquiry import Enquiry
from partsdesk.models.blog_post import BlogPost
from partsdesk.models.contact import ContactMessage, ContactStatus
