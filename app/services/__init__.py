# Services package.
#
#   article_service: orchestration between the /blog router and
#                    ArticleRepository
#
# Services receive their repository through the constructor (see
# ``app.dependencies``) and never touch the session directly, so the
# router layer's ``get_db`` dependency still controls the transaction
# boundary.
