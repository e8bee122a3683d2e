from django.urls import path
from . import views

app_name = 'pvz'

urlpatterns = [
    # GET    /api/pvz/                                - List pickup points
    # POST   /api/pvz/                                - Register pickup point (moderator)
    path('pvz/', views.pickup_points, name='pvz-list'),

    # POST   /api/pvz/{id}/open_reception/            - Open reception (employee)
    # POST   /api/pvz/{id}/close_last_reception/      - Close reception (employee)
    # POST   /api/pvz/{id}/delete_last_product/       - Delete last product (employee)
    path('pvz/<uuid:pvz_id>/open_reception/', views.open_pickup_point_reception, name='open-reception'),
    path('pvz/<uuid:pvz_id>/close_last_reception/', views.close_pickup_point_reception, name='close-last-reception'),
    path('pvz/<uuid:pvz_id>/delete_last_product/', views.delete_pickup_point_last_product, name='delete-last-product'),

    # POST   /api/receptions/                         - Open reception by body pvzId (employee)
    # POST   /api/products/                           - Add product (employee)
    path('receptions/', views.create_reception, name='reception-create'),
    path('products/', views.create_product, name='product-create'),
]
