"""Stay quotation core: catalog models, pricing engine and quote services."""
