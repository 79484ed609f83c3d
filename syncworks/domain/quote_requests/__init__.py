"""Quote request intake, estimate attachment and quotation PDFs"""
