from partsdesk.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse
from partsdesk.schemas.product import ProductCreate, ProductUpdate, ProductResponse, ProductSearchResponse
from partsdesk.schemas.enquiry import (
    EnquiryItem, EnquiryCreate, EnquiryResponse, EnquiryWithProducts, EnquiryCreated,
)
from partsdesk.schemas.blog_post import BlogPostCreate, BlogPostUpdate, BlogPostResponse
from partsdesk.schemas.contact import (
    ContactFormRequest, ContactFormResponse, ContactStatusUpdate, ContactMessageResponse,
)
from partsdesk.schemas.cart import ProductSnapshot, CartItem, CustomerInfo
from partsdesk.schemas.admin import DashboardStats
