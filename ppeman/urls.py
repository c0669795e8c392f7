from django.urls import path

from ppeman import views

app_name = 'ppeman'

urlpatterns = [
    path('inventory/', views.inventory_list, name='inventory'),
    path('stats/', views.inventory_stats, name='stats'),
    path('stock/update/', views.update_stock, name='update-stock'),
    path('thresholds/update/', views.update_thresholds, name='update-thresholds'),
    path('thresholds/bulk-update/', views.bulk_update_thresholds, name='bulk-update-thresholds'),
    path('alerts/', views.alert_list, name='alerts'),
    path('alerts/<uuid:alert_id>/acknowledge/', views.acknowledge_alert, name='acknowledge-alert'),
    path('bulk-restock/', views.bulk_restock, name='bulk-restock'),
    path('bulk-restock-all/', views.bulk_restock_all, name='bulk-restock-all'),
]
