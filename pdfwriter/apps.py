from django.apps import AppConfig


class PdfWriterConfig(AppConfig):
    name = 'pdfwriter'
    verbose_name = 'PDF Writer'
