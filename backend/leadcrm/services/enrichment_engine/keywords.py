# backend/leadcrm/services/enrichment_engine/keywords.py
"""
Keyword dictionaries for website analysis.

Each entry maps a category label to lower-case keyword substrings. A category
matches when any keyword occurs in the lower-cased page text. Declaration
order is output order.
"""

SERVICE_KEYWORDS = {
    'Software-Entwicklung': [
        'software entwicklung', 'softwareentwicklung', 'app entwicklung',
        'entwicklung von software', 'custom development', 'individualentwicklung'
    ],
    'Web-Entwicklung': [
        'web entwicklung', 'webentwicklung', 'webdesign', 'website entwicklung',
        'frontend', 'backend'
    ],
    'App-Entwicklung': [
        'app entwicklung', 'mobile entwicklung', 'ios entwicklung',
        'android entwicklung', 'mobile app'
    ],
    'IT-Beratung': ['beratung', 'consulting', 'it-beratung', 'it consulting', 'strategieberatung'],
    'Cloud Services': ['cloud', 'aws', 'azure', 'google cloud', 'cloud migration', 'cloud lösung'],
    'DevOps': ['devops', 'ci/cd', 'deployment', 'infrastruktur'],
    'UX/UI Design': ['ux', 'ui', 'user experience', 'interface design', 'usability'],
    'E-Commerce': ['e-commerce', 'shop', 'onlineshop', 'webshop', 'shopware', 'magento'],
    'CRM/ERP': ['crm', 'erp', 'salesforce', 'sap', 'business software'],
    'Datenanalyse': ['datenanalyse', 'data analytics', 'business intelligence', 'bi', 'data science'],
    'KI/ML': ['künstliche intelligenz', 'machine learning', 'ki', 'ml', 'ai'],
    'Hosting/Managed Services': ['hosting', 'managed services', 'wartung', 'support', 'betrieb'],
}

TECHNOLOGY_KEYWORDS = {
    'React': ['react', 'react.js', 'reactjs'],
    'Vue': ['vue', 'vue.js', 'vuejs'],
    'Angular': ['angular'],
    'Node.js': ['node.js', 'nodejs', 'node'],
    'Python': ['python', 'django', 'flask'],
    'PHP': ['php', 'laravel', 'symfony'],
    'Java': ['java', 'spring'],
    '.NET': ['.net', 'c#', 'asp.net'],
    'Docker': ['docker', 'container'],
    'Kubernetes': ['kubernetes', 'k8s'],
    'TypeScript': ['typescript'],
    'MongoDB': ['mongodb', 'mongo'],
    'PostgreSQL': ['postgresql', 'postgres'],
    'MySQL': ['mysql'],
}

PRODUCT_KEYWORDS = {
    'SaaS-Plattform': ['saas', 'plattform', 'online platform', 'software as a service'],
    'Eigenprodukt': ['unser produkt', 'unsere lösung', 'unsere software'],
    'White Label': ['white label', 'partner lösung'],
    'CMS': ['content management', 'cms', 'wordpress', 'drupal', 'typo3'],
}

# Services sold as client projects rather than products
PROJECT_SERVICES = ('Software-Entwicklung', 'Web-Entwicklung', 'App-Entwicklung', 'IT-Beratung')

STABLE_LEGAL_FORMS = ('GmbH', 'AG')

# Words that make a news/award sentence worth keeping
EVENT_KEYWORDS = ('neu', 'launch', 'award', 'auszeichnung', 'zertifizierung')
