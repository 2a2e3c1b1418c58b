from django.urls import include, path

urlpatterns = [
    path('api/', include('credit_app.urls')),
]
